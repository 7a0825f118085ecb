#scraper.py
# Rebuilds the bundled emoji.json from the upstream emoji-data project.
# This is an offline maintenance step; the library itself never downloads anything.
# When the upstream sprite sheet changes size, update SHEET_COLUMNS / SHEET_ROWS
# in emoji_index.py in the same change.
import json
import logging
from typing import Any, Dict, List, Optional

import requests

from .data_utils import EMOJI_DATA_PATH
from .models import CATEGORIES, unified_to_char

logger = logging.getLogger(__name__)

# --- Configuration ---
EMOJI_SOURCE_URL = "https://raw.githubusercontent.com/iamcal/emoji-data/master/emoji.json"
REQUEST_TIMEOUT = 30.0

# Upstream files skin-tone modifiers under "Component"; we keep them in their own category.
UPSTREAM_SUBCATEGORY_MAP = {"skin-tone": "Skin Tones"}

EMOJI_FIELDS = ("name", "unified", "image", "sheet_x", "sheet_y", "short_name", "short_names",
                "category", "subcategory")
VARIATION_FIELDS = ("unified", "non_qualified", "image", "sheet_x", "sheet_y", "added_in",
                    "has_img_apple", "has_img_google", "has_img_twitter", "has_img_facebook")
OPTIONAL_FIELDS = ("obsoleted_by", "obsoletes")


def _pick(entry: Dict[str, Any], fields, optional=OPTIONAL_FIELDS) -> Dict[str, Any]:
    picked = {key: entry.get(key) for key in fields}
    for key in optional:
        if entry.get(key) is not None:
            picked[key] = entry[key]
    return picked


def process_emoji_data(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Turns upstream emoji.json entries into the records the index loads: only the
    fields we use, plus a precomputed `char`. Records are ordered by upstream
    `sort_order` (the Unicode emoji-test order), which search results rely on.
    """
    processed = []
    skipped = 0
    for entry in sorted(raw, key=lambda e: e.get("sort_order", 0)):
        category = UPSTREAM_SUBCATEGORY_MAP.get(entry.get("subcategory"), entry.get("category"))
        if category not in CATEGORIES:
            skipped += 1
            continue

        record = _pick(entry, EMOJI_FIELDS, optional=())
        record["category"] = category
        # Some upstream entries (keycaps) have no name.
        record["name"] = record["name"] or entry["short_name"].upper()
        record["short_names"] = list(entry.get("short_names") or [entry["short_name"]])
        record["char"] = unified_to_char(entry["unified"])
        if entry.get("skin_variations"):
            record["skin_variations"] = {
                key: _pick(value, VARIATION_FIELDS) for key, value in entry["skin_variations"].items()
            }
        for key in OPTIONAL_FIELDS:
            if entry.get(key) is not None:
                record[key] = entry[key]
        processed.append(record)

    if skipped:
        logger.warning(f"Skipped {skipped} upstream entries outside the known categories.")
    return processed


def scrape_and_process_emojis(url: str = EMOJI_SOURCE_URL, output_path: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Downloads the upstream dataset, processes it and writes it to `output_path`
    (the bundled emoji.json by default).
    """
    output_path = output_path or EMOJI_DATA_PATH
    logger.info(f"Fetching emoji data from {url}...")
    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException:
        logger.error("Error fetching emoji data.", exc_info=True)
        raise

    logger.info("Processing data...")
    records = process_emoji_data(response.json())

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.info(f"Successfully wrote {len(records)} emoji records to '{output_path}'.")
    return records


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    scrape_and_process_emojis()
