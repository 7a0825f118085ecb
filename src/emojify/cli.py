# src/emojify/cli.py

# These functions are the entry points registered in pyproject.toml.
# `python -m emojify.cli <command> ...` works the same way.
import json
import logging
import sys

from .data_utils import EmojiDataError
from .emoji_index import EmojiIndex
from .scraper import scrape_and_process_emojis

USAGE = """Usage: emojify <command> [arguments]

Commands:
  name <short_name>         Print the emoji record for a short name
  image <name>              Print sprite sheet data for 'smile', ':smile:' or 'wave::skin-tone-3'
  search <text> [limit]     Print short names containing <text> (default limit 10)
  replace <text>            Replace emoji characters with :short_name: tokens
  unreplace <text>          Replace :short_name: tokens with emoji characters
  categories [category]     List categories, or the short names in one category"""


def _print_json(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_lookup(argv) -> int:
    """Runs one lookup command. Returns the process exit code."""
    if not argv:
        print(USAGE, file=sys.stderr)
        return 1

    command, args = argv[0], argv[1:]
    try:
        index = EmojiIndex()
    except EmojiDataError as e:
        print(f"CLI Error: {e}", file=sys.stderr)
        return 1

    if command == "name" and len(args) == 1:
        emoji = index.get_emoji_by_name(args[0])
        if emoji is None:
            print(f"No emoji named '{args[0]}'.", file=sys.stderr)
            return 1
        _print_json(emoji.to_dict())
    elif command == "image" and len(args) == 1:
        image = index.get_image_data_with_colon(args[0])
        if image is None:
            print(f"No image for '{args[0]}'.", file=sys.stderr)
            return 1
        _print_json(image.to_dict())
    elif command == "search" and len(args) in (1, 2):
        try:
            limit = int(args[1]) if len(args) == 2 else 10
        except ValueError:
            print(f"CLI Error: limit must be an integer, got '{args[1]}'.", file=sys.stderr)
            return 1
        for emoji in index.search_emoji(args[0], limit):
            print(f"{emoji.char} :{emoji.short_name}:")
    elif command == "replace" and len(args) == 1:
        print(index.replace_emoji_to_str_with_skin_tone(args[0]))
    elif command == "unreplace" and len(args) == 1:
        print(index.replace_str_to_emoji(args[0]))
    elif command == "categories" and len(args) <= 1:
        if not args:
            for category in index.categories:
                print(category)
        else:
            for emoji in index.get_emojis_by_category(args[0]):
                print(f"{emoji.char} :{emoji.short_name}:")
    else:
        print(f"CLI Error: Unknown command or wrong arguments: '{' '.join(argv)}'.", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    return 0


def run_lookup_entrypoint():
    """Entry point for the 'emojify' command."""
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(levelname)s - %(message)s')
    sys.exit(run_lookup(sys.argv[1:]))


def run_scraper_entrypoint():
    """Entry point for the 'emojify-scrape' command."""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    print("--- Rebuilding emoji.json from upstream ---")
    scrape_and_process_emojis()


if __name__ == "__main__":
    if len(sys.argv) >= 2 and sys.argv[1] == "scrape":
        run_scraper_entrypoint()
    else:
        run_lookup_entrypoint()
