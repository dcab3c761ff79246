"""Tests for the end-to-end rule-based categorization run."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from ocr_categorizer.schemas.items import (
    AchievementCategory,
    EventType,
    Priority,
    TodoStatus,
)
from ocr_categorizer.services.categorizer import categorize, categorize_recognized
from ocr_categorizer.services.demo_data import DEMO_TEXT, demo_recognized_text
from ocr_categorizer.services.segmenter import segment_lines


def _source_texts(result) -> list[str]:
    items = [*result.todos, *result.events, *result.reminders, *result.achievements]
    return [item.source_text for item in items] + list(result.uncategorized)


def test_demo_text_buckets(now: datetime) -> None:
    result = categorize(DEMO_TEXT, 85.5, now=now)

    assert result.counts() == {
        "todos": 3,
        "events": 2,
        "reminders": 1,
        "achievements": 1,
        "uncategorized": 0,
    }


def test_meeting_line_becomes_timed_event(now: datetime) -> None:
    result = categorize("Meeting with team tomorrow at 2 PM", 85.5, now=now)

    assert len(result.events) == 1
    event = result.events[0]
    tomorrow = now + timedelta(days=1)
    assert event.start_time == tomorrow.replace(hour=14, minute=0, second=0, microsecond=0)
    assert event.end_time == event.start_time + timedelta(hours=1)
    assert event.is_all_day is False
    assert event.event_type == EventType.MEETING
    assert event.confidence == pytest.approx(83.4)


def test_proposal_line_becomes_todo(now: datetime) -> None:
    result = categorize("Complete project proposal by Friday", 85.5, now=now)

    assert len(result.todos) == 1
    todo = result.todos[0]
    assert todo.title == "Project proposal by Friday"
    assert todo.priority == Priority.MEDIUM
    assert todo.status == TodoStatus.PENDING


def test_unlocked_line_becomes_achievement(now: datetime) -> None:
    result = categorize("Achievement unlocked: 10 tasks completed!", 85.5, now=now)

    assert result.todos == []
    assert len(result.achievements) == 1
    achievement = result.achievements[0]
    assert achievement.category == AchievementCategory.PRODUCTIVITY
    assert achievement.points == 25


def test_unmatched_lines_are_kept_verbatim(now: datetime) -> None:
    result = categorize("Hello world\n  Lorem ipsum  ", 50.0, now=now)

    assert result.uncategorized == ["Hello world", "Lorem ipsum"]
    assert result.counts()["todos"] == 0


def test_every_line_lands_in_exactly_one_bucket(now: datetime) -> None:
    text = DEMO_TEXT + "\nHello world\nx\n\nDon't forget the meeting"
    result = categorize(text, 70.0, now=now)

    assert sorted(_source_texts(result)) == sorted(segment_lines(text))


def test_source_text_is_the_trimmed_line(now: datetime) -> None:
    result = categorize("   Buy milk today   ", 60.0, now=now)

    assert result.todos[0].source_text == "Buy milk today"


@pytest.mark.parametrize("base", [0.0, 85.5, 100.0, 250.0, -10.0])
def test_item_confidence_stays_in_rule_range(base: float, now: datetime) -> None:
    result = categorize(DEMO_TEXT, base, now=now)

    items = [*result.todos, *result.events, *result.reminders, *result.achievements]
    assert items
    assert all(0.0 <= item.confidence <= 95.0 for item in items)


def test_categorize_is_deterministic_for_fixed_now(now: datetime) -> None:
    assert categorize(DEMO_TEXT, 85.5, now=now) == categorize(DEMO_TEXT, 85.5, now=now)


@pytest.mark.parametrize("text", ["", "   \n\n\t", "a\nb\nab"])
def test_empty_input_yields_empty_result(text: str, now: datetime) -> None:
    result = categorize(text, 90.0, now=now)

    assert result.is_empty()


def test_non_string_text_is_rejected(now: datetime) -> None:
    with pytest.raises(TypeError):
        categorize(None, 90.0, now=now)  # type: ignore[arg-type]


def test_categorize_recognized_uses_document_confidence(now: datetime) -> None:
    recognized = demo_recognized_text()

    assert categorize_recognized(recognized, now=now) == categorize(DEMO_TEXT, 85.5, now=now)


def test_default_now_is_timezone_aware() -> None:
    result = categorize("Dentist appointment today", 80.0)

    assert result.events[0].start_time.tzinfo is not None


def test_naive_now_is_read_as_local_time() -> None:
    result = categorize("Meeting with team tomorrow at 2 PM", 85.5, now=datetime(2026, 3, 10, 8, 30))

    event = result.events[0]
    assert event.start_time.tzinfo is not None
    assert (event.start_time.year, event.start_time.month, event.start_time.day) == (2026, 3, 11)
    assert event.start_time.hour == 14
