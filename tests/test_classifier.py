"""Tests for line classification and its precedence rules."""
from __future__ import annotations

import pytest

from ocr_categorizer.schemas.items import Category
from ocr_categorizer.services.classifier import (
    CLASSIFICATION_RULES,
    classify,
    has_temporal_pattern,
    keyword_match_count,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Achievement unlocked: 10 tasks completed!", Category.ACHIEVEMENT),
        ("Reminder: Doctor appointment next week", Category.REMINDER),
        ("Meeting with team tomorrow at 2 PM", Category.EVENT),
        ("Complete project proposal by Friday", Category.TODO),
        ("Buy groceries: milk, bread, eggs", Category.TODO),
        ("Call mom tonight", Category.EVENT),
        ("Hello world", Category.UNCATEGORIZED),
    ],
)
def test_classify_sample_lines(line: str, expected: Category) -> None:
    assert classify(line) == expected


def test_achievement_wins_over_event() -> None:
    assert classify("Unlocked the meeting badge") == Category.ACHIEVEMENT


def test_reminder_wins_over_event() -> None:
    assert classify("Don't forget the meeting") == Category.REMINDER


def test_keywords_match_case_insensitively() -> None:
    assert classify("MEETING NOW") == Category.EVENT


def test_keywords_match_inside_words() -> None:
    # "do" is a todo keyword and matches inside "Doctor"
    assert classify("Doctor visit") == Category.TODO


def test_time_only_line_falls_back_to_event() -> None:
    assert classify("Friday at 3pm") == Category.EVENT


def test_temporal_reminder_tier_requires_remind() -> None:
    temporal_rules = CLASSIFICATION_RULES[4:]

    assert classify("Remind me at 5pm", rules=temporal_rules) == Category.REMINDER
    assert classify("Standup at 5pm", rules=temporal_rules) == Category.EVENT
    assert classify("Standup later", rules=temporal_rules) == Category.UNCATEGORIZED


def test_rules_are_ordered_by_precedence() -> None:
    order = [category for category, _ in CLASSIFICATION_RULES]

    assert order[:4] == [Category.ACHIEVEMENT, Category.REMINDER, Category.EVENT, Category.TODO]


def test_keyword_match_count_counts_every_hit() -> None:
    assert keyword_match_count("Submit the task due tomorrow", Category.TODO) == 3
    assert keyword_match_count("Submit the task due tomorrow", Category.UNCATEGORIZED) == 0


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("see you at 10:30 am", True),
        ("starts 9pm", True),
        ("due 12/25/2025", True),
        ("due 12-25-2025", True),
        ("lunch on Thursday", True),
        ("ship it next month", True),
        ("5 amazing ideas", False),
        ("Plain line", False),
    ],
)
def test_has_temporal_pattern(line: str, expected: bool) -> None:
    assert has_temporal_pattern(line) is expected
