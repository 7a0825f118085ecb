import pytest

from emojify import EmojiIndex


def make_entry(short_name, unified, category="Smileys & Emotion", short_names=None, skin_variations=None, **extra):
    entry = {
        "name": short_name.upper(),
        "unified": unified,
        "image": f"{unified.lower()}.png",
        "sheet_x": 1,
        "sheet_y": 2,
        "short_name": short_name,
        "short_names": short_names or [short_name],
        "category": category,
        "subcategory": "test",
    }
    if skin_variations is not None:
        entry["skin_variations"] = skin_variations
    entry.update(extra)
    return entry


def make_variation(unified, sheet_x, sheet_y):
    return {
        "unified": unified,
        "non_qualified": None,
        "image": f"{unified.lower()}.png",
        "sheet_x": sheet_x,
        "sheet_y": sheet_y,
        "added_in": "1.0",
        "has_img_apple": True,
        "has_img_google": True,
        "has_img_twitter": True,
        "has_img_facebook": True,
    }


@pytest.fixture(scope="session")
def index():
    """Index over the bundled dataset."""
    return EmojiIndex()


@pytest.fixture
def small_entries():
    return [
        make_entry("xs", "E001"),
        make_entry("sun", "E002", category="Travel & Places"),
        make_entry("sa", "E003", category="Symbols"),
        make_entry("ss", "E004", category="Symbols"),
        make_entry("skin-tone-2", "1F3FB", category="Skin Tones"),
        make_entry("skin-tone-3", "1F3FC", category="Skin Tones"),
        make_entry("bass", "E005", category="Animals & Nature"),
        make_entry(
            "waver", "E006", category="People & Body",
            skin_variations={"1F3FB": make_variation("E006-1F3FB", 3, 4)},
        ),
    ]


@pytest.fixture
def small_index(small_entries):
    return EmojiIndex(records=small_entries)
