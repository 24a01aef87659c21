"""Unit tests for summary generation."""

import pytest

from sportsnews_extractor.summary import (
    SUMMARY_MAX,
    make_summary,
    strip_tags,
    textify,
    truncate,
)

LONG_TEXT = " ".join(["touchdown"] * 80)


class TestMakeSummary:
    """Tests for make_summary."""

    def test_description_inside_window_used_verbatim(self) -> None:
        description = "x" * 200
        assert make_summary(description, LONG_TEXT) == description

    def test_description_is_trimmed(self) -> None:
        description = "  " + "y" * 196 + "  "
        assert make_summary(description, LONG_TEXT) == "y" * 196

    @pytest.mark.parametrize("length", [0, 50, 140, 250, 300])
    def test_description_outside_window_falls_back(self, length: int) -> None:
        summary = make_summary("d" * length, LONG_TEXT)
        assert summary.startswith("touchdown")
        assert len(summary) <= SUMMARY_MAX

    def test_custom_bounds(self) -> None:
        assert make_summary("abcdef", "body", min_len=3, max_len=10) == "abcdef"
        assert make_summary("abc", "body text", min_len=3, max_len=10) == "body text"

    def test_empty_inputs(self) -> None:
        assert make_summary("", "") == ""


class TestTruncate:
    """Tests for truncate."""

    def test_short_text_unchanged(self) -> None:
        assert truncate("short text", 250) == "short text"

    def test_cuts_on_word_boundary(self) -> None:
        assert truncate("aaa bbb ccc", 8) == "aaa..."

    def test_keeps_whole_word_ending_at_limit(self) -> None:
        assert truncate("aaa bbb ccc", 10) == "aaa bbb..."

    def test_never_exceeds_limit(self) -> None:
        result = truncate(LONG_TEXT, 250)
        assert len(result) <= 250
        assert result.endswith("...")
        assert "touchdow..." not in result

    def test_single_long_word_cut_hard(self) -> None:
        assert truncate("x" * 20, 10) == "x" * 7 + "..."


class TestTextify:
    """Tests for strip_tags and textify."""

    def test_strips_markup_and_entities(self) -> None:
        assert strip_tags("<p>Fish &amp; chips</p>") == "Fish & chips"

    def test_collapses_newlines(self) -> None:
        assert textify("line one\nline two\n") == "line one line two"
