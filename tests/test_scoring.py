"""Tests for rule-based confidence scoring."""
from __future__ import annotations

import pytest

from ocr_categorizer.schemas.items import Category
from ocr_categorizer.services.scoring import score_line


def test_score_combines_base_keywords_and_temporal_bonus() -> None:
    # 85.5 * 0.8 + 5 * 1 ("meeting") + 10 (time present)
    score = score_line("Meeting with team tomorrow at 2 PM", Category.EVENT, 85.5)

    assert score == pytest.approx(83.4)


def test_score_grows_with_keyword_count() -> None:
    one = score_line("Lunch", Category.EVENT, 50.0)
    two = score_line("Lunch workshop", Category.EVENT, 50.0)

    assert two - one == pytest.approx(5.0)


def test_score_is_capped_at_95() -> None:
    line = "meeting conference workshop seminar lunch tomorrow"

    assert score_line(line, Category.EVENT, 100.0) == 95.0


def test_score_never_goes_negative() -> None:
    assert score_line("plain words here", Category.TODO, 0.0) == 0.0
    assert score_line("plain words here", Category.TODO, -50.0) == 0.0
