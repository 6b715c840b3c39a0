"""
Tests for the plain-text story splitter (pagebound/utils/text_splitter.py)

Run: python -m pytest tests/test_text_splitter.py -q
"""

import pytest

from pagebound.utils.text_splitter import is_chapter_heading, split_text_into_chapters


class TestChapterHeading:

    @pytest.mark.parametrize("line", ["Chapter 1", "CHAPTER 12: The Storm", "chapter 3"])
    def test_chapter_number_lines(self, line):
        assert is_chapter_heading(line)

    def test_short_uppercase_line(self):
        assert is_chapter_heading("THE RETURN")

    def test_uppercase_line_too_short(self):
        # length must be strictly greater than the minimum
        assert not is_chapter_heading("THE R")

    def test_uppercase_line_too_long(self):
        assert not is_chapter_heading("A" * 50)

    def test_mixed_case_line(self):
        assert not is_chapter_heading("The Return Of The King")

    def test_line_without_letters_counts_as_uppercase(self):
        assert is_chapter_heading("* * * * * *")


class TestSplit:

    def test_headings_open_chapters(self):
        text = "Chapter 1\nIt was dark.\n\nChapter 2\nIt was light."
        chapters = split_text_into_chapters(text)

        assert [c.title for c in chapters] == ["Chapter 1", "Chapter 2"]
        assert [p.content for p in chapters[0].pages] == ["It was dark."]
        assert chapters[1].pages[0].title == "Page 1"

    def test_pages_close_at_word_limit(self):
        text = "Chapter 1\none two three\nfour five\nsix"
        chapters = split_text_into_chapters(text, words_per_page=4)

        assert [p.content for p in chapters[0].pages] == ["one two three\nfour five", "six"]
        assert [p.title for p in chapters[0].pages] == ["Page 1", "Page 2"]

    def test_page_at_exact_word_limit_stays_open(self):
        text = "Chapter 1\none two three\nfour five\nsix"
        chapters = split_text_into_chapters(text, words_per_page=5)

        assert [p.content for p in chapters[0].pages] == ["one two three\nfour five\nsix"]

    def test_scene_break_opens_chapter(self):
        text = "Chapter 1\nhello world\n* * * * * *\nmore text here"
        chapters = split_text_into_chapters(text)

        assert [c.title for c in chapters] == ["Chapter 1", "* * * * * *"]
        assert chapters[1].pages[0].content == "more text here"

    def test_text_before_first_heading_is_dropped(self):
        chapters = split_text_into_chapters("Preface words\nChapter 1\nBody")
        assert len(chapters) == 1
        assert chapters[0].pages[0].content == "Body"

    def test_heading_without_body_has_no_pages(self):
        chapters = split_text_into_chapters("Chapter 1\nChapter 2\nBody")
        assert chapters[0].pages == []
        assert len(chapters[1].pages) == 1

    def test_no_heading_becomes_single_chapter(self):
        words = " ".join(f"w{i}" for i in range(7))
        chapters = split_text_into_chapters(words, words_per_page=3)

        assert len(chapters) == 1
        assert chapters[0].title == "Chapter 1"
        assert [p.content for p in chapters[0].pages] == ["w0 w1 w2", "w3 w4 w5", "w6"]

    def test_empty_text(self):
        chapters = split_text_into_chapters("")
        assert len(chapters) == 1
        assert chapters[0].pages == []

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            split_text_into_chapters("text", words_per_page=0)
