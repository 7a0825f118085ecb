import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union, Any

import regex

from .data_utils import load_emoji_data
from .models import (
    CATEGORIES,
    SKIN_TONE_CATEGORY,
    EmojiRecord,
    ImageDescriptor,
    SkinInfo,
    unified_to_char,
)

logger = logging.getLogger(__name__)

# Packing of the bundled sprite sheet. Must be updated together with emoji.json.
SHEET_COLUMNS = 61
SHEET_ROWS = 61

SKIN_TONE_MARKER = "skin-tone-"
SKIN_TONE_SUFFIX = "::" + SKIN_TONE_MARKER
# len("::skin-tone-N")
SKIN_TONE_SUFFIX_LENGTH = 13

_SKIN_TONE_NUMBER = regex.compile(r"skin-tone-(\d+)")
# :name: optionally followed by :skin-tone-N:
_SHORT_NAME_TOKEN = regex.compile(r":([^:\s]+):(?::(skin-tone-\d+):)?")


def has_skin_tone(value: Optional[str]) -> bool:
    """True if `value` names a skin tone, e.g. 'skin-tone-3' or ':ok_hand::skin-tone-5:'."""
    return value is not None and SKIN_TONE_MARKER in value


# ==============================================================================
# SECTION 1: THE INDEX
# ==============================================================================

class EmojiIndex:
    """
    Lookup, search and text conversion over a fixed emoji dataset.

    All maps and the reverse-substitution pattern are built once in __init__ and
    never modified afterwards, so one instance can be shared between threads.
    Separate instances share nothing.
    """

    def __init__(self, records: Optional[Iterable[Union[EmojiRecord, Dict[str, Any]]]] = None,
                 data_path: Optional[str] = None):
        if records is None:
            records = load_emoji_data(data_path)
        self.emojis: Tuple[EmojiRecord, ...] = tuple(
            r if isinstance(r, EmojiRecord) else EmojiRecord.from_dict(r) for r in records
        )
        self._name_index: Dict[str, EmojiRecord] = {}
        self._char_index: Dict[str, EmojiRecord] = {}
        self._category_index: Dict[str, Tuple[EmojiRecord, ...]] = {}
        self._build_maps()
        self.emoji_unicode_regex = self._build_unicode_regex()
        logger.debug(
            f"Emoji index built: {len(self.emojis)} records, {len(self._name_index)} names, "
            f"{len(self._char_index)} characters, {len(self._category_index)} categories."
        )

    def _build_maps(self) -> None:
        for emoji in self.emojis:
            # Duplicate aliases and characters: the later record wins.
            for name in emoji.short_names:
                self._name_index[name] = emoji
            self._char_index[emoji.char] = emoji

        for category in CATEGORIES:
            if category == SKIN_TONE_CATEGORY:
                continue
            self._category_index[category] = tuple(e for e in self.emojis if e.category == category)

    def _build_unicode_regex(self) -> "regex.Pattern":
        # Longest sequences first so a ZWJ sequence wins over its leading emoji.
        chars = sorted(dict.fromkeys(e.char for e in self.emojis if e.char), key=len, reverse=True)
        alternation = "|".join(regex.escape(c) for c in chars)
        # Group 1 is the emoji, group 2 an optional trailing Fitzpatrick modifier (U+1F3FB..U+1F3FF).
        return regex.compile(f"({alternation})([\U0001F3FB-\U0001F3FF])?")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def categories(self) -> Tuple[str, ...]:
        """The browsable categories, in CATEGORIES order."""
        return tuple(self._category_index)

    def get_emojis_by_category(self, category: str) -> Tuple[EmojiRecord, ...]:
        return self._category_index.get(category, ())

    def get_emoji_by_name(self, name: str) -> Optional[EmojiRecord]:
        """Case-insensitive lookup of any alias. Returns None when unknown."""
        return self._name_index.get(name.lower())

    def get_char_by_name(self, name: str) -> Optional[str]:
        emoji = self.get_emoji_by_name(name)
        return emoji.char if emoji is not None else None

    def get_variation_emojis(self) -> List[EmojiRecord]:
        """All records that have skin-tone variations, in dataset order."""
        return [e for e in self.emojis if e.skin_variations is not None]

    def has_skin_tone(self, value: Optional[str]) -> bool:
        return has_skin_tone(value)

    # ------------------------------------------------------------------
    # Sprite sheet coordinates
    # ------------------------------------------------------------------

    def get_image_data_with_colon(self, emoji_str_with_colon: str) -> Optional[ImageDescriptor]:
        """Same as get_image_data for ':smile:' or ':spock-hand::skin-tone-4:' style tokens."""
        return self.get_image_data(emoji_str_with_colon.strip(":"))

    def get_image_data(self, emoji_str: str) -> Optional[ImageDescriptor]:
        """
        Resolves 'smile' or 'spock-hand::skin-tone-4' to its sprite sheet position.

        Returns None if the base name is unknown, or if a plain name refers to a
        skin-tone modifier itself. A known base with an unusable skin tone yields a
        zeroed descriptor instead of None.
        """
        emoji_str = emoji_str.lower()
        if SKIN_TONE_SUFFIX not in emoji_str:
            emoji = self._name_index.get(emoji_str)
            if emoji is not None and emoji.category != SKIN_TONE_CATEGORY:
                return self.find_image(emoji)
            return None

        match = _SKIN_TONE_NUMBER.search(emoji_str)
        skin = self._name_index.get(f"{SKIN_TONE_MARKER}{match.group(1)}") if match else None
        emoji = self._name_index.get(emoji_str[:-SKIN_TONE_SUFFIX_LENGTH])
        if emoji is None:
            return None
        if skin is None:
            return self._empty_image()
        return self.find_image(emoji, skin)

    def find_image(self, actual: EmojiRecord, variation: Optional[EmojiRecord] = None) -> ImageDescriptor:
        """
        Computes the sheet position of `actual`, or of its skin-tone variation
        selected by the modifier record `variation`.

        Coordinates are percentages: cell index * 100 / (cells - 1).
        """
        multiply_x = 100 / (SHEET_COLUMNS - 1)
        multiply_y = 100 / (SHEET_ROWS - 1)

        if actual.skin_variations is not None and variation is not None:
            found = (actual.skin_variations.get(variation.unified)
                     or actual.skin_variations.get(f"{variation.unified}-{variation.unified}"))
            if found is None:
                return self._empty_image()
            return ImageDescriptor(
                x=found.sheet_x * multiply_x,
                y=found.sheet_y * multiply_y,
                sheet_size_x=100 * SHEET_COLUMNS,
                sheet_size_y=100 * SHEET_ROWS,
                image=found.image,
            )

        return ImageDescriptor(
            x=actual.sheet_x * multiply_x,
            y=actual.sheet_y * multiply_y,
            sheet_size_x=100 * SHEET_COLUMNS,
            sheet_size_y=100 * SHEET_ROWS,
            image=actual.image,
        )

    @staticmethod
    def _empty_image() -> ImageDescriptor:
        return ImageDescriptor(x=0, y=0, sheet_size_x=100 * SHEET_COLUMNS, sheet_size_y=100 * SHEET_ROWS, image="")

    def get_skin_info(self, emoji: EmojiRecord, skin_tone: Optional[str] = None) -> SkinInfo:
        """
        Sheet position of `emoji` in the given skin tone ('skin-tone-2' .. 'skin-tone-6').

        Without a skin tone the record's own grid cell is returned; with one, the
        coordinates are the percentages computed by find_image.
        """
        if skin_tone is not None and has_skin_tone(skin_tone):
            skin_emoji = self._name_index.get(skin_tone)
            pos = self.find_image(emoji, skin_emoji)
            return SkinInfo(
                sheet_x=pos.x,
                sheet_y=pos.y,
                unified=emoji.unified,
                short_name=skin_tone,
                image=pos.image,
            )

        return SkinInfo(
            sheet_x=emoji.sheet_x,
            sheet_y=emoji.sheet_y,
            unified=emoji.unified,
            short_name=emoji.short_name,
            image=emoji.image,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_emoji(self, emoji_str: str, limit: int) -> List[EmojiRecord]:
        """
        Emoji whose short name contains `emoji_str` (case-sensitive), at most `limit`.

        Earlier match positions come first; ties go to the shorter name, then to
        dataset order. Skin-tone modifiers are never returned.
        """
        result = []
        for emoji in self.emojis:
            index = emoji.short_name.find(emoji_str)
            if index > -1 and not has_skin_tone(emoji.short_name):
                result.append((index, emoji))

        result.sort(key=lambda item: (item[0], len(item[1].short_name)))
        return [emoji for _, emoji in result][:limit]

    # ------------------------------------------------------------------
    # Text conversion
    # ------------------------------------------------------------------

    def convert_uni_to_str(self, emoji_uni: str, without_skin_tone_uni: str) -> str:
        """':short_name:' for the emoji `without_skin_tone_uni`, or `emoji_uni` unchanged if unknown."""
        emoji = self._char_index.get(without_skin_tone_uni)
        if emoji is not None:
            return f":{emoji.short_name}:"
        return emoji_uni

    def replace_emoji_to_str(self, text: str) -> str:
        """
        Replaces every known emoji in `text` with its ':short_name:' token.

        A skin-tone modifier directly after an emoji is dropped; use
        replace_emoji_to_str_with_skin_tone to keep it.
        """
        return self.emoji_unicode_regex.sub(lambda m: self.convert_uni_to_str(m.group(0), m.group(1)), text)

    def replace_emoji_to_str_with_skin_tone(self, text: str) -> str:
        """Like replace_emoji_to_str, but '👋🏻' becomes ':wave::skin-tone-2:'."""
        def _convert(m):
            converted = self.convert_uni_to_str(m.group(0), m.group(1))
            if m.group(2) is None or converted == m.group(0):
                return converted
            skin = self._char_index.get(m.group(2))
            if skin is None:
                return converted
            return f"{converted}:{skin.short_name}:"
        return self.emoji_unicode_regex.sub(_convert, text)

    def replace_str_to_emoji(self, text: str) -> str:
        """
        Replaces ':short_name:' and ':short_name::skin-tone-N:' tokens with emoji characters.

        Unknown names are left as they are. A skin tone the emoji has no variation
        for falls back to the plain emoji.
        """
        def _convert(m):
            emoji = self.get_emoji_by_name(m.group(1))
            if emoji is None:
                return m.group(0)
            if m.group(2) is None or emoji.skin_variations is None:
                return emoji.char
            skin = self._name_index.get(m.group(2))
            if skin is None:
                return emoji.char
            found = (emoji.skin_variations.get(skin.unified)
                     or emoji.skin_variations.get(f"{skin.unified}-{skin.unified}"))
            return unified_to_char(found.unified) if found is not None else emoji.char
        return _SHORT_NAME_TOKEN.sub(_convert, text)
