"""
Categorization Engine.

Runs the rule-based pipeline over recognized text:
segment → classify → extract → score → bucket. The run is deterministic
for a given ``now`` and performs no I/O beyond a debug log line.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping, Optional

from pydantic import BaseModel

from ocr_categorizer.logging_config import get_logger
from ocr_categorizer.schemas.items import CategorizedResult, Category
from ocr_categorizer.schemas.recognition import RecognizedText
from ocr_categorizer.services.classifier import classify
from ocr_categorizer.services.extractors import (
    extract_achievement,
    extract_event,
    extract_reminder,
    extract_todo,
)
from ocr_categorizer.services.scoring import score_line
from ocr_categorizer.services.segmenter import segment_lines

logger = get_logger(__name__)

ItemExtractor = Callable[[str, float, datetime], BaseModel]

# Category → (extractor bundle, result bucket name)
EXTRACTORS: Mapping[Category, tuple[ItemExtractor, str]] = {
    Category.TODO: (extract_todo, "todos"),
    Category.EVENT: (extract_event, "events"),
    Category.REMINDER: (extract_reminder, "reminders"),
    Category.ACHIEVEMENT: (extract_achievement, "achievements"),
}


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def reference_time(now: Optional[datetime] = None) -> datetime:
    """``now`` as an aware datetime; naive values are read as local time."""
    if now is None:
        return local_now()
    if now.tzinfo is None:
        return now.astimezone()
    return now


def categorize(
    text: str,
    confidence: float,
    now: Optional[datetime] = None,
) -> CategorizedResult:
    """
    Categorize OCR text line by line.

    Args:
        text: Raw recognized text; may be empty.
        confidence: Whole-document recognition confidence (0-100).
        now: Reference time for relative dates. Defaults to local now.

    Returns:
        A fresh CategorizedResult. Each kept line lands in exactly one bucket.
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    now = reference_time(now)
    base_confidence = min(max(float(confidence), 0.0), 100.0)
    result = CategorizedResult()

    for line in segment_lines(text):
        category = classify(line)
        if category == Category.UNCATEGORIZED:
            result.uncategorized.append(line)
            continue

        extractor, bucket = EXTRACTORS[category]
        line_confidence = score_line(line, category, base_confidence)
        getattr(result, bucket).append(extractor(line, line_confidence, now))

    logger.debug("content_categorized", **result.counts())
    return result


def categorize_recognized(
    recognized: RecognizedText,
    now: Optional[datetime] = None,
) -> CategorizedResult:
    return categorize(recognized.text, recognized.confidence, now=now)
