"""
Tests for page content helpers (pagebound/utils/content.py)

Run: python -m pytest tests/test_content.py -q
"""

from pagebound.utils.content import extract_image_urls, split_content_segments, estimate_reading_minutes


def test_extracts_image_links_case_insensitive():
    content = "a http://x.org/a.JPG b https://y.org/b.webp c https://z.org/page.html"
    assert extract_image_urls(content) == ["http://x.org/a.JPG", "https://y.org/b.webp"]


def test_segments_keep_order():
    segments = split_content_segments("Intro https://x.org/a.png Outro")
    assert segments == [
        {"type": "text", "value": "Intro "},
        {"type": "image", "value": "https://x.org/a.png"},
        {"type": "text", "value": " Outro"},
    ]


def test_blank_text_between_images_dropped():
    segments = split_content_segments("https://x.org/a.png\n https://x.org/b.gif")
    assert [s["type"] for s in segments] == ["image", "image"]


def test_plain_text_is_single_segment():
    assert split_content_segments("Just words") == [{"type": "text", "value": "Just words"}]


def test_empty_content():
    assert split_content_segments("") == []


def test_reading_minutes_round_up():
    assert estimate_reading_minutes("word " * 201, 200) == 2
    assert estimate_reading_minutes("", 200) == 1
