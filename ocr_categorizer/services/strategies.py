"""
Extraction strategies and the selection between them.

Two interchangeable strategies produce the same ``CategorizedResult``
shape: the deterministic rule-based engine and the AI analysis path.
``run_extraction`` tries the preferred strategies in order and always
finishes with the rule-based one, so a failing AI call degrades the
result instead of failing the capture. The outcome comes from exactly
one strategy; items are never merged field by field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional, Sequence

from pydantic import BaseModel

from ocr_categorizer.logging_config import get_logger
from ocr_categorizer.schemas.analysis import (
    AnalysisEventType,
    GeminiAnalysis,
    GeminiEvent,
    GeminiReminder,
    GeminiTodo,
    ReminderFrequency,
)
from ocr_categorizer.schemas.items import (
    CategorizedResult,
    EventType,
    ExtractedEvent,
    ExtractedReminder,
    ExtractedTodo,
    RecurrencePattern,
)
from ocr_categorizer.schemas.recognition import RecognizedText
from ocr_categorizer.services.ai_analysis import GeminiAnalyzer, build_fallback_analysis
from ocr_categorizer.services.categorizer import categorize_recognized, reference_time
from ocr_categorizer.services.extractors import default_reminder_time, event_color
from ocr_categorizer.services.keywords import (
    ALL_DAY_END_HOUR,
    ALL_DAY_START_HOUR,
    DEFAULT_EVENT_DURATION_HOURS,
)

logger = get_logger(__name__)

RULE_BASED = "rule_based"
GEMINI = "gemini"

_AI_EVENT_TYPES = {
    AnalysisEventType.MEETING: EventType.MEETING,
    AnalysisEventType.APPOINTMENT: EventType.APPOINTMENT,
    AnalysisEventType.DEADLINE: EventType.TASK,
    AnalysisEventType.PERSONAL: EventType.PERSONAL,
}


class ExtractionOutcome(BaseModel):
    """Result of one extraction run, tagged with the strategy that produced it."""
    strategy: str
    result: CategorizedResult
    analysis: Optional[GeminiAnalysis] = None
    fallback_reason: Optional[str] = None


class ExtractionStrategy(ABC):
    name: str

    @abstractmethod
    async def extract(self, recognized: RecognizedText, now: datetime) -> ExtractionOutcome:
        raise NotImplementedError


class RuleBasedStrategy(ExtractionStrategy):
    name = RULE_BASED

    async def extract(self, recognized: RecognizedText, now: datetime) -> ExtractionOutcome:
        return ExtractionOutcome(
            strategy=self.name,
            result=categorize_recognized(recognized, now=now),
        )


class GeminiStrategy(ExtractionStrategy):
    name = GEMINI

    def __init__(self, analyzer: GeminiAnalyzer, image_context: Optional[str] = None) -> None:
        self.analyzer = analyzer
        self.image_context = image_context

    async def extract(self, recognized: RecognizedText, now: datetime) -> ExtractionOutcome:
        analysis = await self.analyzer.analyze(recognized.text, image_context=self.image_context)
        return ExtractionOutcome(
            strategy=self.name,
            result=analysis_to_result(analysis, now),
            analysis=analysis,
        )


async def run_extraction(
    recognized: RecognizedText,
    strategies: Sequence[ExtractionStrategy] = (),
    now: Optional[datetime] = None,
) -> ExtractionOutcome:
    """
    Return the first successful strategy's outcome.

    Args:
        recognized: Recognition output to extract from.
        strategies: Preferred strategies, most preferred first. The
            rule-based strategy always runs last, after every preferred
            one has failed.
        now: Reference time for relative dates.
    """
    now = reference_time(now)
    preferred = [s for s in strategies if not isinstance(s, RuleBasedStrategy)]

    fallback_reason: Optional[str] = None
    for strategy in preferred:
        try:
            outcome = await strategy.extract(recognized, now)
        except Exception as e:
            fallback_reason = f"{strategy.name}: {e}"
            logger.warning(
                "extraction_strategy_failed",
                strategy=strategy.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            continue
        return outcome

    outcome = await RuleBasedStrategy().extract(recognized, now)
    if fallback_reason is not None:
        # Summary fields only; the items still come from the rules
        outcome.analysis = build_fallback_analysis(recognized.text)
        outcome.fallback_reason = fallback_reason
    return outcome


# ── AI analysis → item shapes ────────────────────────────────────


def parse_timestamp(value: Optional[str], now: datetime) -> Optional[datetime]:
    """Read an ISO-8601 timestamp from the AI payload; naive values take ``now``'s zone."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=now.tzinfo)
    return parsed


def _scaled_confidence(confidence: float) -> float:
    return min(max(confidence * 100.0, 0.0), 100.0)


def _todo_from_ai(item: GeminiTodo, now: datetime) -> ExtractedTodo:
    return ExtractedTodo(
        title=item.title,
        description=item.description or None,
        priority=item.priority,
        due_date=parse_timestamp(item.due_date, now),
        tags=list(item.tags),
        confidence=_scaled_confidence(item.confidence),
        source_text=item.title,
    )


def _event_from_ai(item: GeminiEvent, now: datetime) -> ExtractedEvent:
    event_type = _AI_EVENT_TYPES[item.type]
    start = parse_timestamp(item.start_time, now)
    end = parse_timestamp(item.end_time, now)

    if start is None:
        is_all_day = True
        start = now.replace(hour=ALL_DAY_START_HOUR, minute=0, second=0, microsecond=0)
        end = now.replace(hour=ALL_DAY_END_HOUR, minute=0, second=0, microsecond=0)
    else:
        is_all_day = False
        if end is None or end < start:
            end = start + timedelta(hours=DEFAULT_EVENT_DURATION_HOURS)

    return ExtractedEvent(
        title=item.title,
        description=item.description or None,
        start_time=start,
        end_time=end,
        location=item.location or None,
        event_type=event_type,
        color=event_color(event_type),
        is_all_day=is_all_day,
        confidence=_scaled_confidence(item.confidence),
        source_text=item.title,
    )


def _reminder_from_ai(item: GeminiReminder, now: datetime) -> ExtractedReminder:
    recurring = item.frequency != ReminderFrequency.ONCE
    return ExtractedReminder(
        title=item.title,
        message=item.description or None,
        remind_at=parse_timestamp(item.remind_at, now) or default_reminder_time(now),
        is_recurring=recurring,
        recurrence_pattern=RecurrencePattern(item.frequency.value) if recurring else None,
        priority=item.priority,
        confidence=_scaled_confidence(item.confidence),
        source_text=item.title,
    )


def analysis_to_result(analysis: GeminiAnalysis, now: Optional[datetime] = None) -> CategorizedResult:
    """Map AI items onto the rule-based item shapes. AI output has no achievements."""
    now = reference_time(now)
    items = analysis.extracted_items
    return CategorizedResult(
        todos=[_todo_from_ai(item, now) for item in items.todos],
        events=[_event_from_ai(item, now) for item in items.events],
        reminders=[_reminder_from_ai(item, now) for item in items.reminders],
    )


def preferred_strategies(
    analyzer: Optional[GeminiAnalyzer] = None,
    image_context: Optional[str] = None,
) -> list[ExtractionStrategy]:
    """Strategies to try before the rule-based engine."""
    if analyzer is not None and analyzer.is_configured:
        return [GeminiStrategy(analyzer, image_context=image_context)]
    return []
