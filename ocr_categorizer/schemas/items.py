"""
Data models for structured items extracted from recognized text.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Category(str, Enum):
    TODO = "todo"
    EVENT = "event"
    REMINDER = "reminder"
    ACHIEVEMENT = "achievement"
    UNCATEGORIZED = "uncategorized"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ReminderPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TodoStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class EventType(str, Enum):
    MEETING = "meeting"
    APPOINTMENT = "appointment"
    TASK = "task"
    REMINDER = "reminder"
    PERSONAL = "personal"


class RecurrencePattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class AchievementCategory(str, Enum):
    PRODUCTIVITY = "productivity"
    CONSISTENCY = "consistency"
    GOALS = "goals"
    GENERAL = "general"


class ExtractedTodo(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: TodoStatus = TodoStatus.PENDING
    due_date: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=100.0)
    source_text: str  # The line this item was derived from


class ExtractedEvent(BaseModel):
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    event_type: EventType = EventType.MEETING
    color: str
    is_all_day: bool = False
    confidence: float = Field(ge=0.0, le=100.0)
    source_text: str


class ExtractedReminder(BaseModel):
    title: str
    message: Optional[str] = None
    remind_at: datetime
    is_recurring: bool = False
    recurrence_pattern: Optional[RecurrencePattern] = None
    priority: ReminderPriority = ReminderPriority.MEDIUM
    confidence: float = Field(ge=0.0, le=100.0)
    source_text: str


class ExtractedAchievement(BaseModel):
    title: str
    description: Optional[str] = None
    icon: str
    category: AchievementCategory = AchievementCategory.GENERAL
    points: int = Field(ge=0)
    confidence: float = Field(ge=0.0, le=100.0)
    source_text: str


class CategorizedResult(BaseModel):
    """Per-category buckets for one categorization run."""
    todos: list[ExtractedTodo] = Field(default_factory=list)
    events: list[ExtractedEvent] = Field(default_factory=list)
    reminders: list[ExtractedReminder] = Field(default_factory=list)
    achievements: list[ExtractedAchievement] = Field(default_factory=list)
    uncategorized: list[str] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "todos": len(self.todos),
            "events": len(self.events),
            "reminders": len(self.reminders),
            "achievements": len(self.achievements),
            "uncategorized": len(self.uncategorized),
        }

    def is_empty(self) -> bool:
        return not any(self.counts().values())
