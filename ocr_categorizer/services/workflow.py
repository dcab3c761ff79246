"""
Screenshot processing workflow.

Takes recognition output through extraction and hands the result to a
storage sink:

1. Pick the extraction strategy (AI analysis if configured, else rules)
2. Fall back to the rule-based engine if the AI path fails
3. Build the extracted_data record and per-category rows
4. Hand both to the sink; a sink failure is logged, not raised
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from ocr_categorizer.config import Settings, get_settings
from ocr_categorizer.logging_config import (
    capture_id_var,
    generate_trace_id,
    get_logger,
    trace_id_var,
)
from ocr_categorizer.schemas.recognition import RecognizedText
from ocr_categorizer.services.ai_analysis import GeminiAnalyzer
from ocr_categorizer.services.storage_rows import build_extraction_record, to_table_rows
from ocr_categorizer.services.strategies import (
    ExtractionOutcome,
    preferred_strategies,
    run_extraction,
)

logger = get_logger(__name__)


class RecordSink(ABC):
    """Receives the payloads for one processed capture."""

    @abstractmethod
    async def save(self, record: dict[str, Any], rows: dict[str, list[dict[str, Any]]]) -> None:
        raise NotImplementedError


class ProcessingReport(BaseModel):
    trace_id: str
    capture_id: str
    outcome: ExtractionOutcome
    stored: bool = False
    storage_error: Optional[str] = None


def default_analyzer(settings: Optional[Settings] = None) -> Optional[GeminiAnalyzer]:
    """An analyzer from settings, or None when AI analysis is off or unconfigured."""
    settings = settings or get_settings()
    if not settings.ai_analysis_enabled:
        return None
    return GeminiAnalyzer.from_settings(settings)


async def process_recognized_text(
    recognized: RecognizedText,
    analyzer: Optional[GeminiAnalyzer] = None,
    sink: Optional[RecordSink] = None,
    user_id: Optional[str] = None,
    source_file_url: Optional[str] = None,
    image_context: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ProcessingReport:
    """
    Run extraction for one capture and hand the result to ``sink``.

    Never raises on AI or storage failures: the outcome is always
    returned, with ``fallback_reason`` / ``storage_error`` describing
    what degraded.
    """
    # A caller's trace (one CLI run, one batch) spans many captures
    trace_id = trace_id_var.get() or generate_trace_id()
    capture_id = generate_trace_id()
    trace_token = trace_id_var.set(trace_id)
    capture_token = capture_id_var.set(capture_id)
    try:
        logger.info(
            "capture_processing_started",
            text_length=len(recognized.text),
            ocr_confidence=recognized.confidence,
            blocks=len(recognized.blocks),
            ai_enabled=analyzer is not None and analyzer.is_configured,
        )

        outcome = await run_extraction(
            recognized,
            strategies=preferred_strategies(analyzer, image_context=image_context),
            now=now,
        )
        report = ProcessingReport(trace_id=trace_id, capture_id=capture_id, outcome=outcome)

        if sink is not None:
            record = build_extraction_record(
                recognized, outcome, user_id=user_id, source_file_url=source_file_url
            )
            rows = to_table_rows(outcome.result, user_id=user_id)
            try:
                await sink.save(record, rows)
                report.stored = True
            except Exception as e:
                report.storage_error = str(e)
                logger.error("capture_storage_failed", error=str(e))

        logger.info(
            "capture_processed",
            strategy=outcome.strategy,
            fallback_reason=outcome.fallback_reason,
            stored=report.stored,
            **outcome.result.counts(),
        )
        return report
    finally:
        capture_id_var.reset(capture_token)
        trace_id_var.reset(trace_token)
