"""
Row payloads for the storage collaborator.

Builds the ``extracted_data`` record and the per-category table rows
(todos, events, reminders, achievements) from an extraction outcome.
Nothing here talks to a database; callers hand the payloads to a sink.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ocr_categorizer.schemas.items import CategorizedResult
from ocr_categorizer.schemas.recognition import RecognizedText
from ocr_categorizer.services.strategies import ExtractionOutcome

EXTRACTION_TYPE_OCR = "ocr"
EXTRACTION_STATUS_COMPLETED = "completed"

# Columns written per table; everything else on the item stays in processed_data.
TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "todos": ("title", "description", "priority", "status", "due_date", "tags"),
    "events": (
        "title", "description", "start_time", "end_time",
        "location", "event_type", "color", "is_all_day",
    ),
    "reminders": ("title", "message", "remind_at", "is_recurring", "recurrence_pattern", "priority"),
    "achievements": ("title", "description", "icon", "category", "points"),
}


def _serialize_value(value: Any) -> Any:
    """Ensure a value is JSON-serializable for jsonb / timestamptz columns."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    return str(value)


def to_table_rows(result: CategorizedResult, user_id: Optional[str] = None) -> dict[str, list[dict[str, Any]]]:
    """One row list per category table. Uncategorized lines have no table."""
    rows: dict[str, list[dict[str, Any]]] = {}
    for table, columns in TABLE_COLUMNS.items():
        table_rows = []
        for item in getattr(result, table):
            row = {column: _serialize_value(getattr(item, column)) for column in columns}
            if user_id is not None:
                row["user_id"] = user_id
            table_rows.append(row)
        rows[table] = table_rows
    return rows


def build_extraction_record(
    recognized: RecognizedText,
    outcome: ExtractionOutcome,
    user_id: Optional[str] = None,
    source_file_url: Optional[str] = None,
) -> dict[str, Any]:
    """The ``extracted_data`` payload: raw recognition plus processed result."""
    record: dict[str, Any] = {
        "source_file_url": source_file_url,
        "extraction_type": EXTRACTION_TYPE_OCR,
        "raw_data": recognized.model_dump(mode="json"),
        "processed_data": {
            **outcome.result.model_dump(mode="json"),
            "strategy": outcome.strategy,
            "analysis": outcome.analysis.model_dump(mode="json") if outcome.analysis else None,
        },
        "confidence_score": recognized.confidence,
        "status": EXTRACTION_STATUS_COMPLETED,
    }
    if user_id is not None:
        record["user_id"] = user_id
    return record
