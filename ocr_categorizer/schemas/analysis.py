"""
Data models for the AI (Gemini) analysis payload.

Field names follow Python conventions; the camelCase keys the model
returns are accepted through aliases. Validation is lenient: unknown
enum values fall back to a default instead of failing the whole payload.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ocr_categorizer.schemas.items import Priority, ReminderPriority


class AnalysisCategory(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    FINANCE = "finance"
    EDUCATION = "education"
    OTHER = "other"


class AnalysisEventType(str, Enum):
    MEETING = "meeting"
    APPOINTMENT = "appointment"
    DEADLINE = "deadline"
    PERSONAL = "personal"


class ReminderFrequency(str, Enum):
    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def _coerce_choice(value: Any, choices: type[Enum], default: Enum) -> Enum:
    if isinstance(value, str):
        try:
            return choices(value.strip().lower())
        except ValueError:
            pass
    return default


def _clamp_unit(value: Any, default: float = 0.5) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return min(max(number, 0.0), 1.0)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _text(value: Any) -> str:
    return _optional_text(value) or ""


class _AnalysisModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeminiTodo(_AnalysisModel):
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    estimated_duration: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    due_date: Optional[str] = None
    confidence: float = 0.5

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return _text(value)

    @field_validator("estimated_duration", "due_date", mode="before")
    @classmethod
    def _optional_fields(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> Priority:
        return _coerce_choice(value, Priority, Priority.MEDIUM)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> list[str]:
        return _string_list(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> float:
        return _clamp_unit(value)


class GeminiEvent(_AnalysisModel):
    title: str
    description: str = ""
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    attendees: list[str] = Field(default_factory=list)
    type: AnalysisEventType = AnalysisEventType.MEETING
    confidence: float = 0.5

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return _text(value)

    @field_validator("start_time", "end_time", "location", mode="before")
    @classmethod
    def _optional_fields(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> AnalysisEventType:
        return _coerce_choice(value, AnalysisEventType, AnalysisEventType.MEETING)

    @field_validator("attendees", mode="before")
    @classmethod
    def _attendees(cls, value: Any) -> list[str]:
        return _string_list(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> float:
        return _clamp_unit(value)


class GeminiReminder(_AnalysisModel):
    title: str
    description: str = ""
    remind_at: Optional[str] = None
    frequency: ReminderFrequency = ReminderFrequency.ONCE
    priority: ReminderPriority = ReminderPriority.MEDIUM
    confidence: float = 0.5

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> str:
        return _text(value)

    @field_validator("remind_at", mode="before")
    @classmethod
    def _remind_at(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("frequency", mode="before")
    @classmethod
    def _frequency(cls, value: Any) -> ReminderFrequency:
        return _coerce_choice(value, ReminderFrequency, ReminderFrequency.ONCE)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> ReminderPriority:
        if isinstance(value, str) and value.strip().lower() == "urgent":
            return ReminderPriority.HIGH
        return _coerce_choice(value, ReminderPriority, ReminderPriority.MEDIUM)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> float:
        return _clamp_unit(value)


class AnalysisItems(_AnalysisModel):
    todos: list[GeminiTodo] = Field(default_factory=list)
    events: list[GeminiEvent] = Field(default_factory=list)
    reminders: list[GeminiReminder] = Field(default_factory=list)


class GeminiAnalysis(_AnalysisModel):
    """Full analysis returned by the AI path."""
    summary: str = "No summary available"
    key_points: list[str] = Field(default_factory=list)
    suggested_actions: list[str] = Field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    category: AnalysisCategory = AnalysisCategory.OTHER
    confidence: float = 0.5
    extracted_items: AnalysisItems = Field(default_factory=AnalysisItems)

    @field_validator("summary", mode="before")
    @classmethod
    def _summary(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value
        return "No summary available"

    @field_validator("key_points", "suggested_actions", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return _string_list(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> Priority:
        return _coerce_choice(value, Priority, Priority.MEDIUM)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> AnalysisCategory:
        return _coerce_choice(value, AnalysisCategory, AnalysisCategory.OTHER)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> float:
        return _clamp_unit(value)
