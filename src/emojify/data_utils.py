import json
import logging
import os
from typing import List, Optional

from .models import EmojiRecord

logger = logging.getLogger(__name__)

# The dataset ships inside the package, next to this file.
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
EMOJI_DATA_FILENAME = "emoji.json"
EMOJI_DATA_PATH = os.path.join(SCRIPT_DIR, EMOJI_DATA_FILENAME)


class EmojiDataError(ValueError):
    """Raised when the emoji dataset cannot be read or is not shaped like one."""


def load_emoji_data(path: Optional[str] = None) -> List[EmojiRecord]:
    """
    Reads the emoji dataset from `path` (the bundled emoji.json by default).

    Returns:
        The records in dataset order.

    Raises:
        EmojiDataError: if the file is missing, is not valid JSON, or holds
        something other than a list of emoji entries.
    """
    data_path = path or EMOJI_DATA_PATH
    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        logger.error(f"'{data_path}' not found. Run the 'emojify-scrape' command to build it.")
        raise EmojiDataError(f"Emoji data file not found: {data_path}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Could not decode JSON from '{data_path}'.")
        raise EmojiDataError(f"Emoji data file is not valid JSON: {data_path}") from e
    except OSError as e:
        logger.error(f"Could not read '{data_path}'.", exc_info=True)
        raise EmojiDataError(f"Emoji data file could not be read: {data_path}") from e

    if not isinstance(raw, list):
        raise EmojiDataError(f"Expected a list of emoji entries in '{data_path}', got {type(raw).__name__}.")

    records = []
    for position, entry in enumerate(raw):
        try:
            records.append(EmojiRecord.from_dict(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise EmojiDataError(f"Malformed emoji entry at position {position} in '{data_path}': {e!r}") from e

    logger.info(f"Loaded {len(records)} emoji records from '{data_path}'.")
    return records
