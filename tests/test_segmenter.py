"""Tests for line segmentation."""
from __future__ import annotations

from ocr_categorizer.services.segmenter import segment_lines


def test_segment_lines_trims_and_drops_short_lines() -> None:
    text = "  a  \n\nhello\n ab \n a b c \r\nworld  "

    assert segment_lines(text) == ["hello", "a b c", "world"]


def test_segment_lines_counts_only_non_whitespace_characters() -> None:
    assert segment_lines("x  y") == []
    assert segment_lines("x y z") == ["x y z"]


def test_segment_lines_preserves_reading_order() -> None:
    text = "third line\nfirst line\nsecond line"

    assert segment_lines(text) == ["third line", "first line", "second line"]


def test_segment_lines_handles_empty_and_blank_input() -> None:
    assert segment_lines("") == []
    assert segment_lines("   \n\t\n  ") == []
