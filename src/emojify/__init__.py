from .data_utils import EMOJI_DATA_PATH, EmojiDataError, load_emoji_data
from .emoji_index import SHEET_COLUMNS, SHEET_ROWS, EmojiIndex, has_skin_tone
from .models import (
    CATEGORIES,
    SKIN_TONE_CATEGORY,
    EmojiRecord,
    ImageDescriptor,
    SkinInfo,
    SkinVariationRecord,
    unified_to_char,
)

__all__ = [
    "CATEGORIES",
    "EMOJI_DATA_PATH",
    "SHEET_COLUMNS",
    "SHEET_ROWS",
    "SKIN_TONE_CATEGORY",
    "EmojiDataError",
    "EmojiIndex",
    "EmojiRecord",
    "ImageDescriptor",
    "SkinInfo",
    "SkinVariationRecord",
    "has_skin_tone",
    "load_emoji_data",
    "unified_to_char",
]
