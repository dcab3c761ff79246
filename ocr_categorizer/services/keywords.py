"""
Static keyword and pattern tables for the rule-based categorizer.

Everything here is immutable configuration data: tuples, frozen mappings
and compiled patterns. The classifier and extractors receive these tables
as defaults and never mutate them.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from ocr_categorizer.schemas.items import (
    AchievementCategory,
    Category,
    EventType,
    Priority,
    RecurrencePattern,
)

# ── Category vocabularies (substring, case-insensitive) ──────────

TODO_KEYWORDS: tuple[str, ...] = (
    "todo", "task", "complete", "finish", "do", "need to", "must", "should",
    "deadline", "due", "submit", "deliver", "work on", "fix", "update",
    "buy", "get", "pick up", "call", "email", "contact", "schedule",
)

EVENT_KEYWORDS: tuple[str, ...] = (
    "meeting", "appointment", "conference", "call", "session", "interview",
    "lunch", "dinner", "party", "event", "gathering", "presentation",
    "workshop", "training", "seminar", "class", "lesson",
)

REMINDER_KEYWORDS: tuple[str, ...] = (
    "reminder", "remind", "don't forget", "remember", "note", "alert",
    "notify", "ping", "follow up", "check", "review",
)

ACHIEVEMENT_KEYWORDS: tuple[str, ...] = (
    "achievement", "unlocked", "completed", "milestone", "goal reached",
    "success", "accomplished", "finished", "badge", "reward", "level up",
    "streak", "progress", "target met",
)

CATEGORY_KEYWORDS: Mapping[Category, tuple[str, ...]] = MappingProxyType({
    Category.TODO: TODO_KEYWORDS,
    Category.EVENT: EVENT_KEYWORDS,
    Category.REMINDER: REMINDER_KEYWORDS,
    Category.ACHIEVEMENT: ACHIEVEMENT_KEYWORDS,
})

# ── Temporal patterns ────────────────────────────────────────────

TEMPORAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(\d{1,2}):(\d{2})\s*(am|pm)\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2})\s*(am|pm)\b", re.IGNORECASE),
    re.compile(r"(tomorrow|today|tonight)", re.IGNORECASE),
    re.compile(r"(monday|tuesday|wednesday|thursday|friday|saturday|sunday)", re.IGNORECASE),
    re.compile(r"(next week|this week|next month|this month)", re.IGNORECASE),
    re.compile(r"(\d{1,2}/\d{1,2}/\d{2,4})"),
    re.compile(r"(\d{1,2}-\d{1,2}-\d{2,4})"),
)

# H[:MM] am|pm; the colon is optional so "230pm" reads as 2:30pm
TIME_OF_DAY_PATTERN = re.compile(r"\b(\d{1,2}):?(\d{2})?\s*(am|pm)\b", re.IGNORECASE)

ABSOLUTE_DATE_FORMAT = "%m/%d/%Y"

# ── Priority ─────────────────────────────────────────────────────

# Ordered: the first tier with a hit wins.
PRIORITY_KEYWORDS: tuple[tuple[Priority, tuple[str, ...]], ...] = (
    (Priority.URGENT, ("urgent", "asap", "immediately", "critical", "emergency")),
    (Priority.HIGH, ("important", "priority", "high", "crucial", "vital")),
    (Priority.MEDIUM, ("medium", "normal", "regular")),
    (Priority.LOW, ("low", "minor", "optional", "when possible")),
)

# ── Todo status ──────────────────────────────────────────────────

COMPLETED_STATUS_KEYWORDS: tuple[str, ...] = ("completed", "done", "finished")
IN_PROGRESS_STATUS_KEYWORDS: tuple[str, ...] = ("working on", "in progress")

# ── Events ───────────────────────────────────────────────────────

LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bat\s+([^,\n]+)", re.IGNORECASE),
    re.compile(r"\bin\s+([^,\n]+)", re.IGNORECASE),
    re.compile(r"\blocation:\s*([^,\n]+)", re.IGNORECASE),
)

EVENT_TYPE_KEYWORDS: tuple[tuple[EventType, tuple[str, ...]], ...] = (
    (EventType.MEETING, ("meeting", "conference")),
    (EventType.APPOINTMENT, ("appointment", "doctor")),
    (EventType.PERSONAL, ("personal", "family")),
    (EventType.TASK, ("task", "work")),
)

EVENT_COLORS: Mapping[EventType, str] = MappingProxyType({
    EventType.MEETING: "#3B82F6",
    EventType.APPOINTMENT: "#10B981",
    EventType.TASK: "#F59E0B",
    EventType.REMINDER: "#EF4444",
    EventType.PERSONAL: "#8B5CF6",
})
DEFAULT_EVENT_COLOR = "#6366F1"

ALL_DAY_START_HOUR = 9
ALL_DAY_END_HOUR = 17
DEFAULT_EVENT_DURATION_HOURS = 1

# ── Reminders ────────────────────────────────────────────────────

RECURRING_KEYWORDS: tuple[str, ...] = ("daily", "weekly", "monthly", "every", "recurring", "repeat")

RECURRENCE_KEYWORDS: tuple[tuple[RecurrencePattern, tuple[str, ...]], ...] = (
    (RecurrencePattern.DAILY, ("daily", "every day")),
    (RecurrencePattern.WEEKLY, ("weekly", "every week")),
    (RecurrencePattern.MONTHLY, ("monthly", "every month")),
)

DEFAULT_REMINDER_HOUR = 9

# ── Achievements ─────────────────────────────────────────────────

ACHIEVEMENT_CATEGORY_KEYWORDS: tuple[tuple[AchievementCategory, tuple[str, ...]], ...] = (
    (AchievementCategory.PRODUCTIVITY, ("task", "productive")),
    (AchievementCategory.CONSISTENCY, ("streak", "consistent")),
    (AchievementCategory.GOALS, ("goal", "target")),
)

ACHIEVEMENT_ICONS: Mapping[AchievementCategory, str] = MappingProxyType({
    AchievementCategory.PRODUCTIVITY: "zap",
    AchievementCategory.CONSISTENCY: "calendar-check",
    AchievementCategory.GOALS: "target",
    AchievementCategory.GENERAL: "trophy",
})

POINTS_PATTERN = re.compile(r"(\d+)\s*points?", re.IGNORECASE)

# Ordered: the first tier with a hit wins.
POINT_TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (100, ("milestone", "major")),
    (50, ("streak", "consistent")),
)
DEFAULT_POINTS = 25

# ── Tags ─────────────────────────────────────────────────────────

TAG_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("work", ("work", "project")),
    ("personal", ("personal", "family")),
    ("health", ("health", "doctor")),
    ("shopping", ("shopping", "buy")),
    ("urgent", ("urgent", "asap")),
)

# ── Titles ───────────────────────────────────────────────────────

TITLE_LABEL_PATTERN = re.compile(r"^(todo|task|reminder|achievement|note):\s*", re.IGNORECASE)
TITLE_VERB_PATTERN = re.compile(r"^(complete|finish|do|need to)\s+", re.IGNORECASE)
UNTITLED = "Untitled"

DESCRIPTION_MIN_LENGTH = 50
