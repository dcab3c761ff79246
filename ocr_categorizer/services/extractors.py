"""
Field extractors for classified lines.

Every function here is pure: it reads the line (and, for temporal fields,
a caller-supplied ``now``) and returns a value. Nothing raises on odd line
content; unparseable dates and times degrade to ``None`` or a default.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from ocr_categorizer.schemas.items import (
    AchievementCategory,
    EventType,
    ExtractedAchievement,
    ExtractedEvent,
    ExtractedReminder,
    ExtractedTodo,
    Priority,
    RecurrencePattern,
    ReminderPriority,
    TodoStatus,
)
from ocr_categorizer.services.classifier import contains_any
from ocr_categorizer.services.keywords import (
    ABSOLUTE_DATE_FORMAT,
    ACHIEVEMENT_CATEGORY_KEYWORDS,
    ACHIEVEMENT_ICONS,
    ALL_DAY_END_HOUR,
    ALL_DAY_START_HOUR,
    COMPLETED_STATUS_KEYWORDS,
    DEFAULT_EVENT_COLOR,
    DEFAULT_EVENT_DURATION_HOURS,
    DEFAULT_POINTS,
    DEFAULT_REMINDER_HOUR,
    DESCRIPTION_MIN_LENGTH,
    EVENT_COLORS,
    EVENT_TYPE_KEYWORDS,
    IN_PROGRESS_STATUS_KEYWORDS,
    LOCATION_PATTERNS,
    POINT_TIERS,
    POINTS_PATTERN,
    PRIORITY_KEYWORDS,
    RECURRENCE_KEYWORDS,
    RECURRING_KEYWORDS,
    TAG_KEYWORDS,
    TEMPORAL_PATTERNS,
    TIME_OF_DAY_PATTERN,
    TITLE_LABEL_PATTERN,
    TITLE_VERB_PATTERN,
    UNTITLED,
)


class TimeInfo(NamedTuple):
    start: datetime
    end: datetime
    is_all_day: bool


# ── Priority ─────────────────────────────────────────────────────


def extract_priority(line: str) -> Priority:
    for priority, keywords in PRIORITY_KEYWORDS:
        if contains_any(line, keywords):
            return priority
    return Priority.MEDIUM


def to_reminder_priority(priority: Priority) -> ReminderPriority:
    """Reminders have no urgent tier; urgent collapses to high."""
    if priority == Priority.URGENT:
        return ReminderPriority.HIGH
    return ReminderPriority(priority.value)


# ── Dates and times ──────────────────────────────────────────────


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar-month arithmetic; the day is clamped to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def extract_date(line: str, now: datetime) -> Optional[datetime]:
    """
    Resolve a date mentioned in the line.

    Relative terms win over absolute dates. Absolute dates are read with a
    single ``M/d/yyyy`` format; other date-like matches (``3-14-2025``,
    weekday names) are detected by the temporal patterns but not converted.

    Returns:
        A datetime in ``now``'s timezone, or None when nothing parses.
    """
    lower = line.lower()
    if "today" in lower:
        return now
    if "tomorrow" in lower:
        return now + timedelta(days=1)
    if "next week" in lower:
        return now + timedelta(weeks=1)
    if "next month" in lower:
        return add_months(now, 1)

    for pattern in TEMPORAL_PATTERNS:
        match = pattern.search(line)
        if not match:
            continue
        try:
            parsed = datetime.strptime(match.group(0), ABSOLUTE_DATE_FORMAT)
        except ValueError:
            continue
        return parsed.replace(tzinfo=now.tzinfo)

    return None


def extract_clock_time(line: str) -> Optional[tuple[int, int]]:
    """Return ``(hour, minute)`` on a 24-hour clock for an ``H[:MM] am|pm`` mention."""
    match = TIME_OF_DAY_PATTERN.search(line)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if hour > 12 or minute > 59:
        return None

    is_pm = match.group(3).lower() == "pm"
    if is_pm and hour != 12:
        hour += 12
    elif not is_pm and hour == 12:
        hour = 0
    return hour, minute


def extract_time_info(line: str, now: datetime) -> TimeInfo:
    """
    Work out an event's time window.

    A clock time makes a timed event of default length; without one the
    event spans the working day of the resolved date (or today).
    """
    base = extract_date(line, now) or now

    clock = extract_clock_time(line)
    if clock is not None:
        hour, minute = clock
        start = base.replace(hour=hour, minute=minute, second=0, microsecond=0)
        end = start + timedelta(hours=DEFAULT_EVENT_DURATION_HOURS)
        return TimeInfo(start=start, end=end, is_all_day=False)

    start = base.replace(hour=ALL_DAY_START_HOUR, minute=0, second=0, microsecond=0)
    end = base.replace(hour=ALL_DAY_END_HOUR, minute=0, second=0, microsecond=0)
    return TimeInfo(start=start, end=end, is_all_day=True)


def default_reminder_time(now: datetime) -> datetime:
    """Tomorrow at 09:00."""
    tomorrow = now + timedelta(days=1)
    return tomorrow.replace(hour=DEFAULT_REMINDER_HOUR, minute=0, second=0, microsecond=0)


# ── Events ───────────────────────────────────────────────────────


def extract_location(line: str) -> Optional[str]:
    for pattern in LOCATION_PATTERNS:
        match = pattern.search(line)
        if match:
            location = match.group(1).strip()
            if location:
                return location
    return None


def determine_event_type(line: str) -> EventType:
    for event_type, keywords in EVENT_TYPE_KEYWORDS:
        if contains_any(line, keywords):
            return event_type
    return EventType.MEETING


def event_color(event_type: EventType) -> str:
    return EVENT_COLORS.get(event_type, DEFAULT_EVENT_COLOR)


# ── Reminders ────────────────────────────────────────────────────


def is_recurring(line: str) -> bool:
    return contains_any(line, RECURRING_KEYWORDS)


def extract_recurrence_pattern(line: str) -> Optional[RecurrencePattern]:
    # None with is_recurring=True means "repeats, cadence unknown"
    for pattern, keywords in RECURRENCE_KEYWORDS:
        if contains_any(line, keywords):
            return pattern
    return None


# ── Achievements ─────────────────────────────────────────────────


def determine_achievement_category(line: str) -> AchievementCategory:
    for category, keywords in ACHIEVEMENT_CATEGORY_KEYWORDS:
        if contains_any(line, keywords):
            return category
    return AchievementCategory.GENERAL


def achievement_icon(category: AchievementCategory) -> str:
    return ACHIEVEMENT_ICONS.get(category, ACHIEVEMENT_ICONS[AchievementCategory.GENERAL])


def extract_points(line: str) -> int:
    match = POINTS_PATTERN.search(line)
    if match:
        return int(match.group(1))
    for points, keywords in POINT_TIERS:
        if contains_any(line, keywords):
            return points
    return DEFAULT_POINTS


# ── Todos ────────────────────────────────────────────────────────


def extract_tags(line: str) -> list[str]:
    return [tag for tag, keywords in TAG_KEYWORDS if contains_any(line, keywords)]


def extract_todo_status(line: str) -> TodoStatus:
    if contains_any(line, COMPLETED_STATUS_KEYWORDS):
        return TodoStatus.COMPLETED
    if contains_any(line, IN_PROGRESS_STATUS_KEYWORDS):
        return TodoStatus.IN_PROGRESS
    return TodoStatus.PENDING


# ── Titles ───────────────────────────────────────────────────────


def clean_title(line: str) -> str:
    """Strip a ``label:`` prefix and a leading imperative verb, then capitalize."""
    title = TITLE_LABEL_PATTERN.sub("", line)
    title = TITLE_VERB_PATTERN.sub("", title).strip()
    if title:
        title = title[0].upper() + title[1:]
    return title or UNTITLED


def _long_line_description(line: str) -> Optional[str]:
    return line if len(line) > DESCRIPTION_MIN_LENGTH else None


# ── Per-category bundles ─────────────────────────────────────────


def extract_todo(line: str, confidence: float, now: datetime) -> ExtractedTodo:
    return ExtractedTodo(
        title=clean_title(line),
        description=_long_line_description(line),
        priority=extract_priority(line),
        status=extract_todo_status(line),
        due_date=extract_date(line, now),
        tags=extract_tags(line),
        confidence=confidence,
        source_text=line,
    )


def extract_event(line: str, confidence: float, now: datetime) -> ExtractedEvent:
    time_info = extract_time_info(line, now)
    event_type = determine_event_type(line)
    return ExtractedEvent(
        title=clean_title(line),
        description=_long_line_description(line),
        start_time=time_info.start,
        end_time=time_info.end,
        location=extract_location(line),
        event_type=event_type,
        color=event_color(event_type),
        is_all_day=time_info.is_all_day,
        confidence=confidence,
        source_text=line,
    )


def extract_reminder(line: str, confidence: float, now: datetime) -> ExtractedReminder:
    recurring = is_recurring(line)
    return ExtractedReminder(
        title=clean_title(line),
        message=line,
        remind_at=extract_date(line, now) or default_reminder_time(now),
        is_recurring=recurring,
        recurrence_pattern=extract_recurrence_pattern(line) if recurring else None,
        priority=to_reminder_priority(extract_priority(line)),
        confidence=confidence,
        source_text=line,
    )


def extract_achievement(line: str, confidence: float, now: datetime) -> ExtractedAchievement:
    category = determine_achievement_category(line)
    return ExtractedAchievement(
        title=clean_title(line),
        description=line,
        icon=achievement_icon(category),
        category=category,
        points=extract_points(line),
        confidence=confidence,
        source_text=line,
    )
