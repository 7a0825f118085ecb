from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Any

SKIN_TONE_CATEGORY = "Skin Tones"

# Fixed set of categories a record may belong to. Every category except
# SKIN_TONE_CATEGORY is browsable through the category index.
CATEGORIES = (
    "Activities",
    "Animals & Nature",
    "Flags",
    "Food & Drink",
    "Objects",
    "People & Body",
    SKIN_TONE_CATEGORY,
    "Smileys & Emotion",
    "Symbols",
    "Travel & Places",
)


def unified_to_char(unified: str) -> str:
    """Converts a hyphen-joined codepoint string (e.g. '1F44B-1F3FB') to the literal emoji."""
    return "".join(chr(int(code, 16)) for code in unified.split("-"))


@dataclass(frozen=True)
class SkinVariationRecord:
    """One skin-tone rendering of a base emoji on the sprite sheet."""
    unified: str
    image: str
    sheet_x: int
    sheet_y: int
    non_qualified: Optional[str] = None
    added_in: Optional[str] = None
    has_img_apple: bool = False
    has_img_google: bool = False
    has_img_twitter: bool = False
    has_img_facebook: bool = False
    obsoleted_by: Optional[str] = None
    obsoletes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkinVariationRecord":
        return cls(
            unified=data["unified"],
            image=data["image"],
            sheet_x=int(data["sheet_x"]),
            sheet_y=int(data["sheet_y"]),
            non_qualified=data.get("non_qualified"),
            added_in=data.get("added_in"),
            has_img_apple=bool(data.get("has_img_apple", False)),
            has_img_google=bool(data.get("has_img_google", False)),
            has_img_twitter=bool(data.get("has_img_twitter", False)),
            has_img_facebook=bool(data.get("has_img_facebook", False)),
            obsoleted_by=data.get("obsoleted_by"),
            obsoletes=data.get("obsoletes"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "unified": self.unified,
            "non_qualified": self.non_qualified,
            "image": self.image,
            "sheet_x": self.sheet_x,
            "sheet_y": self.sheet_y,
            "added_in": self.added_in,
            "has_img_apple": self.has_img_apple,
            "has_img_google": self.has_img_google,
            "has_img_twitter": self.has_img_twitter,
            "has_img_facebook": self.has_img_facebook,
        }
        if self.obsoleted_by is not None:
            data["obsoleted_by"] = self.obsoleted_by
        if self.obsoletes is not None:
            data["obsoletes"] = self.obsoletes
        return data


@dataclass(frozen=True)
class EmojiRecord:
    """
    A single emoji from the dataset.

    `short_names` holds every alias (the first one is normally `short_name`).
    `skin_variations` is keyed by the unified code of a skin-tone modifier, or by
    two such codes joined with '-' for emoji showing two people.
    """
    name: str
    unified: str
    image: str
    sheet_x: int
    sheet_y: int
    short_name: str
    short_names: Tuple[str, ...]
    category: str
    subcategory: str
    char: str
    # Read-only view; records are shared by every lookup of an index.
    skin_variations: Optional[Mapping[str, SkinVariationRecord]] = field(default=None, hash=False)
    obsoleted_by: Optional[str] = None
    obsoletes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmojiRecord":
        variations = data.get("skin_variations")
        if variations is not None:
            variations = MappingProxyType(
                {key: SkinVariationRecord.from_dict(value) for key, value in variations.items()}
            )
        return cls(
            name=data["name"],
            unified=data["unified"],
            image=data["image"],
            sheet_x=int(data["sheet_x"]),
            sheet_y=int(data["sheet_y"]),
            short_name=data["short_name"],
            short_names=tuple(data.get("short_names") or (data["short_name"],)),
            category=data["category"],
            subcategory=data.get("subcategory", ""),
            char=data.get("char") or unified_to_char(data["unified"]),
            skin_variations=variations,
            obsoleted_by=data.get("obsoleted_by"),
            obsoletes=data.get("obsoletes"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "unified": self.unified,
            "image": self.image,
            "sheet_x": self.sheet_x,
            "sheet_y": self.sheet_y,
            "short_name": self.short_name,
            "short_names": list(self.short_names),
            "category": self.category,
            "subcategory": self.subcategory,
            "char": self.char,
        }
        if self.skin_variations is not None:
            data["skin_variations"] = {key: value.to_dict() for key, value in self.skin_variations.items()}
        if self.obsoleted_by is not None:
            data["obsoleted_by"] = self.obsoleted_by
        if self.obsoletes is not None:
            data["obsoletes"] = self.obsoletes
        return data


@dataclass(frozen=True)
class ImageDescriptor:
    """Position of an emoji on the sprite sheet, as percentages usable for CSS background-position."""
    x: float
    y: float
    sheet_size_x: int
    sheet_size_y: int
    image: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "sheet_size_x": self.sheet_size_x,
            "sheet_size_y": self.sheet_size_y,
            "image": self.image,
        }


@dataclass(frozen=True)
class SkinInfo:
    """Sheet position and image of an emoji, optionally in a given skin tone."""
    sheet_x: float
    sheet_y: float
    unified: str
    short_name: str
    image: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sheet_x": self.sheet_x,
            "sheet_y": self.sheet_y,
            "unified": self.unified,
            "short_name": self.short_name,
            "image": self.image,
        }
