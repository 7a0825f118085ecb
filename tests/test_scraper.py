import json

import pytest
import requests

from emojify import EmojiIndex, load_emoji_data
from emojify import scraper


UPSTREAM = [
    {
        "name": None,
        "unified": "0023-FE0F-20E3",
        "non_qualified": "0023-20E3",
        "docomo": "E6E0",
        "image": "0023-fe0f-20e3.png",
        "sheet_x": 0,
        "sheet_y": 0,
        "short_name": "hash",
        "short_names": ["hash"],
        "text": None,
        "texts": None,
        "category": "Symbols",
        "subcategory": "keycap",
        "sort_order": 1500,
        "added_in": "0.6",
        "has_img_apple": True,
    },
    {
        "name": "EMOJI MODIFIER FITZPATRICK TYPE-4",
        "unified": "1F3FD",
        "image": "1f3fd.png",
        "sheet_x": 10,
        "sheet_y": 12,
        "short_name": "skin-tone-4",
        "short_names": ["skin-tone-4"],
        "category": "Component",
        "subcategory": "skin-tone",
        "sort_order": 400,
    },
    {
        "name": "EMOJI COMPONENT RED HAIR",
        "unified": "1F9B0",
        "image": "1f9b0.png",
        "sheet_x": 44,
        "sheet_y": 1,
        "short_name": "red_haired",
        "short_names": ["red_haired"],
        "category": "Component",
        "subcategory": "hair-style",
        "sort_order": 410,
    },
    {
        "name": "RAISED HAND WITH PART BETWEEN MIDDLE AND RING FINGERS",
        "unified": "1F596",
        "image": "1f596.png",
        "sheet_x": 31,
        "sheet_y": 26,
        "short_name": "spock-hand",
        "short_names": ["spock-hand"],
        "category": "People & Body",
        "subcategory": "hand-fingers-open",
        "sort_order": 200,
        "skin_variations": {
            "1F3FD": {
                "unified": "1F596-1F3FD",
                "non_qualified": None,
                "image": "1f596-1f3fd.png",
                "sheet_x": 31,
                "sheet_y": 29,
                "added_in": "1.0",
                "has_img_apple": True,
                "has_img_google": True,
                "has_img_twitter": True,
                "has_img_facebook": True,
                "obsoletes": "1F590",
            },
        },
    },
]


class FakeResponse:
    def __init__(self, data, status_code=200):
        self._data = data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self._data


def test_process_emoji_data():
    records = scraper.process_emoji_data(UPSTREAM)
    assert [r["short_name"] for r in records] == ["spock-hand", "skin-tone-4", "hash"]

    spock, skin, hash_key = records
    assert hash_key["name"] == "HASH"
    assert hash_key["char"] == "#\ufe0f\u20e3"
    assert "docomo" not in hash_key and "sort_order" not in hash_key
    assert skin["category"] == "Skin Tones"
    assert spock["skin_variations"]["1F3FD"]["image"] == "1f596-1f3fd.png"
    assert spock["skin_variations"]["1F3FD"]["obsoletes"] == "1F590"


def test_scrape_and_process_emojis(monkeypatch, tmp_path):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse(UPSTREAM)

    monkeypatch.setattr(scraper.requests, "get", fake_get)
    output = tmp_path / "emoji.json"
    records = scraper.scrape_and_process_emojis(output_path=str(output))

    assert calls == [scraper.EMOJI_SOURCE_URL]
    assert json.loads(output.read_text(encoding="utf-8")) == records
    assert "#\ufe0f\u20e3" in output.read_text(encoding="utf-8")

    index = EmojiIndex(records=load_emoji_data(str(output)))
    assert index.get_image_data("spock-hand::skin-tone-4").image == "1f596-1f3fd.png"
    assert index.get_image_data("skin-tone-4") is None


def test_scrape_reraises_http_errors(monkeypatch, tmp_path):
    monkeypatch.setattr(scraper.requests, "get", lambda url, timeout: FakeResponse([], status_code=503))
    output = tmp_path / "emoji.json"
    with pytest.raises(requests.exceptions.HTTPError):
        scraper.scrape_and_process_emojis(output_path=str(output))
    assert not output.exists()
