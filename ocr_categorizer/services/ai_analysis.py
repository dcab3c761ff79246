"""
AI Analysis Service.

Sends recognized screenshot text to Gemini and validates the structured
analysis it returns. The response is parsed defensively: the first JSON
object in the model output is taken, unknown enum values fall back to
defaults, and individual malformed items are skipped with a warning.

Failures raise ``AnalysisError`` subclasses; deciding what to do about
them (normally: use the rule-based engine) is the caller's job.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from ocr_categorizer.config import Settings, get_settings
from ocr_categorizer.logging_config import get_logger
from ocr_categorizer.schemas.analysis import (
    AnalysisItems,
    GeminiAnalysis,
    GeminiEvent,
    GeminiReminder,
    GeminiTodo,
)

logger = get_logger(__name__)


class AnalysisError(Exception):
    """Base class for AI analysis failures."""


class AnalysisNotConfiguredError(AnalysisError):
    """No API key is available for the analysis service."""


class AnalysisResponseError(AnalysisError):
    """The service failed or returned something that is not an analysis."""


ANALYSIS_PROMPT = """Analyze the following extracted text from a screenshot and provide a comprehensive analysis in JSON format.

{image_context}
Extracted Text:
\"\"\"
{text}
\"\"\"

Please provide a JSON response with the following structure:
{
  "summary": "Brief summary of the content (2-3 sentences)",
  "keyPoints": ["Key point 1", "Key point 2", "Key point 3"],
  "suggestedActions": ["Action 1", "Action 2", "Action 3"],
  "priority": "low|medium|high|urgent",
  "category": "work|personal|health|finance|education|other",
  "confidence": 0.85,
  "extractedItems": {
    "todos": [
      {
        "title": "Task title",
        "description": "Detailed description",
        "priority": "medium",
        "estimatedDuration": "30 minutes",
        "tags": ["tag1", "tag2"],
        "dueDate": "2024-01-15T10:00:00Z",
        "confidence": 0.9
      }
    ],
    "events": [
      {
        "title": "Event title",
        "description": "Event description",
        "startTime": "2024-01-15T14:00:00Z",
        "endTime": "2024-01-15T15:00:00Z",
        "location": "Location if mentioned",
        "attendees": ["person1", "person2"],
        "type": "meeting|appointment|deadline|personal",
        "confidence": 0.8
      }
    ],
    "reminders": [
      {
        "title": "Reminder title",
        "description": "What to remember",
        "remindAt": "2024-01-15T09:00:00Z",
        "frequency": "once|daily|weekly|monthly",
        "priority": "low|medium|high",
        "confidence": 0.7
      }
    ]
  }
}

Focus on:
1. Extracting actionable items (todos, events, reminders)
2. Identifying dates, times, and deadlines
3. Determining priority based on urgency indicators
4. Categorizing content appropriately
5. Providing practical suggested actions
6. Assigning realistic confidence scores

Return only valid JSON without any markdown formatting or additional text."""

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

URGENT_WORDS = ("urgent", "asap", "immediately", "deadline")
WORK_WORDS = ("meeting", "project", "work", "office", "client")


def build_prompt(text: str, image_context: Optional[str] = None) -> str:
    context = f"Image Context: {image_context}\n" if image_context else ""
    return ANALYSIS_PROMPT.replace("{image_context}", context).replace("{text}", text)


class GeminiAnalyzer:
    """
    Thin async client for the Gemini ``generateContent`` endpoint.

    Pass ``client`` to reuse a connection pool or to inject a mock
    transport in tests; otherwise a client is opened per call.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash-latest",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta/models",
        timeout: float = 30.0,
        temperature: float = 0.3,
        max_output_tokens: int = 2048,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> GeminiAnalyzer:
        settings = settings or get_settings()
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.gemini_timeout_seconds,
            temperature=settings.gemini_temperature,
            max_output_tokens=settings.gemini_max_output_tokens,
            client=client,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    async def analyze(self, text: str, image_context: Optional[str] = None) -> GeminiAnalysis:
        """
        Run one analysis call.

        Raises:
            AnalysisNotConfiguredError: No API key.
            AnalysisResponseError: Transport failure, non-2xx status, or an
                unusable response body.
        """
        if not self.is_configured:
            raise AnalysisNotConfiguredError("Gemini API key not configured")

        logger.info("analysis_started", model=self.model, text_length=len(text))

        body = {
            "contents": [{"parts": [{"text": build_prompt(text, image_context)}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": self.max_output_tokens,
            },
        }

        try:
            data = await self._post(body)
        except httpx.HTTPStatusError as e:
            raise AnalysisResponseError(
                f"Gemini API error: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise AnalysisResponseError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise AnalysisResponseError("Gemini returned a non-JSON body") from e

        generated = _candidate_text(data)
        if not generated:
            raise AnalysisResponseError("No response from Gemini API")

        analysis = parse_analysis_response(generated)
        logger.info(
            "analysis_complete",
            model=self.model,
            confidence=analysis.confidence,
            todos=len(analysis.extracted_items.todos),
            events=len(analysis.extracted_items.events),
            reminders=len(analysis.extracted_items.reminders),
        )
        return analysis

    async def _post(self, body: dict[str, Any]) -> Any:
        params = {"key": self.api_key}
        if self._client is not None:
            response = await self._client.post(self.endpoint, params=params, json=body, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.endpoint, params=params, json=body)
            response.raise_for_status()
            return response.json()


def _candidate_text(data: Any) -> Optional[str]:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


def parse_analysis_response(generated: str) -> GeminiAnalysis:
    """
    Validate model output into a GeminiAnalysis.

    Raises:
        AnalysisResponseError: No JSON object in the text, or it does not
            decode to an object.
    """
    match = _JSON_OBJECT.search(generated)
    if not match:
        raise AnalysisResponseError("No JSON found in response")

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AnalysisResponseError(f"Invalid JSON in response: {e}") from e
    if not isinstance(parsed, dict):
        raise AnalysisResponseError("Analysis response is not a JSON object")

    raw_items = parsed.pop("extractedItems", parsed.pop("extracted_items", None))
    try:
        analysis = GeminiAnalysis.model_validate(parsed)
    except ValidationError as e:
        raise AnalysisResponseError(f"Invalid analysis shape: {e}") from e

    analysis.extracted_items = _parse_items(raw_items)
    return analysis


def _parse_items(raw_items: Any) -> AnalysisItems:
    if not isinstance(raw_items, dict):
        return AnalysisItems()
    return AnalysisItems(
        todos=_validate_each(raw_items.get("todos"), GeminiTodo, "todo"),
        events=_validate_each(raw_items.get("events"), GeminiEvent, "event"),
        reminders=_validate_each(raw_items.get("reminders"), GeminiReminder, "reminder"),
    )


def _validate_each(raw: Any, model: type[BaseModel], kind: str) -> list[Any]:
    if not isinstance(raw, list):
        return []

    items: list[Any] = []
    for item in raw:
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("skipping_malformed_item", kind=kind, item=item, error=str(e))
    return items


def build_fallback_analysis(text: str) -> GeminiAnalysis:
    """
    Keyword-only stand-in for an AI summary.

    Produces summary-level fields when the AI path is unavailable; it
    never extracts items, since the rule-based engine does that.
    """
    words = text.lower().split()
    has_urgent = any(word in URGENT_WORDS for word in words)
    has_work = any(word in WORK_WORDS for word in words)

    summary = f"Extracted text contains {len(words)} words."
    if has_urgent:
        summary += " Contains urgent indicators."
    if has_work:
        summary += " Appears to be work-related."

    key_points = [line.strip() for line in text.splitlines() if len(line.strip()) > 10][:3]

    return GeminiAnalysis(
        summary=summary,
        key_points=key_points,
        suggested_actions=[
            "Review extracted content",
            "Categorize items manually",
            "Set appropriate reminders",
        ],
        priority="high" if has_urgent else "medium",
        category="work" if has_work else "other",
        confidence=0.6,
    )
