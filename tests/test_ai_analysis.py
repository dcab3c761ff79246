"""Tests for the Gemini analysis client and response parsing."""
from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from ocr_categorizer.config import Settings
from ocr_categorizer.schemas.analysis import AnalysisCategory
from ocr_categorizer.schemas.items import Priority
from ocr_categorizer.services.ai_analysis import (
    AnalysisNotConfiguredError,
    AnalysisResponseError,
    GeminiAnalyzer,
    build_fallback_analysis,
    build_prompt,
    parse_analysis_response,
)

ANALYSIS_PAYLOAD = {
    "summary": "Two work items.",
    "keyPoints": ["Proposal due Friday"],
    "suggestedActions": ["Block time on Thursday"],
    "priority": "high",
    "category": "work",
    "confidence": 0.9,
    "extractedItems": {
        "todos": [{"title": "Write proposal", "priority": "high", "confidence": 0.8}],
        "events": [{"title": "Team sync", "startTime": "2026-03-11T14:00:00-05:00", "type": "meeting"}],
        "reminders": [],
    },
}


def _gemini_body(generated: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": generated}]}}]}


def _analyze(handler, api_key: str = "test-key", text: str = "Write proposal"):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            analyzer = GeminiAnalyzer(api_key=api_key, model="gemini-test", client=client)
            return await analyzer.analyze(text, image_context="A todo app")

    return asyncio.run(run())


# ── Response parsing ─────────────────────────────────────────────


def test_parse_plain_json() -> None:
    analysis = parse_analysis_response(json.dumps(ANALYSIS_PAYLOAD))

    assert analysis.summary == "Two work items."
    assert analysis.priority == Priority.HIGH
    assert analysis.category == AnalysisCategory.WORK
    assert [todo.title for todo in analysis.extracted_items.todos] == ["Write proposal"]
    assert analysis.extracted_items.events[0].start_time == "2026-03-11T14:00:00-05:00"


def test_parse_json_wrapped_in_markdown() -> None:
    generated = "Here you go:\n```json\n" + json.dumps(ANALYSIS_PAYLOAD) + "\n```"

    assert parse_analysis_response(generated).confidence == 0.9


def test_parse_skips_malformed_items() -> None:
    payload = {
        "summary": "Mixed",
        "extractedItems": {
            "todos": [{"title": "ok"}, "garbage", {"description": "no title"}],
            "events": "not a list",
        },
    }

    analysis = parse_analysis_response(json.dumps(payload))

    assert [todo.title for todo in analysis.extracted_items.todos] == ["ok"]
    assert analysis.extracted_items.events == []
    assert analysis.extracted_items.reminders == []


def test_parse_keeps_items_with_null_optional_fields() -> None:
    payload = {
        "extractedItems": {
            "todos": [{
                "title": "Submit report",
                "description": None,
                "priority": "high",
                "estimatedDuration": 30,
                "dueDate": None,
            }],
            "events": [{
                "title": "Standup",
                "description": None,
                "startTime": "2026-03-11T09:00:00Z",
                "endTime": None,
                "location": None,
            }],
            "reminders": [{"title": "Call bank", "description": None, "remindAt": None}],
        },
    }

    items = parse_analysis_response(json.dumps(payload)).extracted_items

    assert len(items.todos) == 1
    assert items.todos[0].description == ""
    assert items.todos[0].priority == Priority.HIGH
    assert items.todos[0].estimated_duration == "30"
    assert items.todos[0].due_date is None
    assert len(items.events) == 1
    assert items.events[0].start_time == "2026-03-11T09:00:00Z"
    assert items.events[0].end_time is None
    assert items.events[0].location is None
    assert len(items.reminders) == 1
    assert items.reminders[0].remind_at is None


@pytest.mark.parametrize("generated", ["no json here", "{not json}", "[1, 2, 3]"])
def test_parse_rejects_unusable_output(generated: str) -> None:
    with pytest.raises(AnalysisResponseError):
        parse_analysis_response(generated)


def test_build_prompt_includes_context_and_text() -> None:
    prompt = build_prompt("Buy milk", image_context="Shopping list")

    assert "Image Context: Shopping list" in prompt
    assert '"""\nBuy milk\n"""' in prompt
    assert "{image_context}" not in prompt
    assert "Image Context" not in build_prompt("Buy milk")


# ── HTTP client ──────────────────────────────────────────────────


def test_analyze_posts_to_generate_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_gemini_body(json.dumps(ANALYSIS_PAYLOAD)))

    analysis = _analyze(handler)

    assert analysis.category == AnalysisCategory.WORK
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path.endswith("/gemini-test:generateContent")
    assert request.url.params["key"] == "test-key"
    body = json.loads(request.content)
    assert "Write proposal" in body["contents"][0]["parts"][0]["text"]
    assert body["generationConfig"]["maxOutputTokens"] == 2048


def test_analyze_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "boom"}})

    with pytest.raises(AnalysisResponseError, match="500"):
        _analyze(handler)


def test_analyze_raises_on_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AnalysisResponseError):
        _analyze(handler)


def test_analyze_raises_on_empty_candidates() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    with pytest.raises(AnalysisResponseError, match="No response"):
        _analyze(handler)


def test_analyze_raises_on_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(AnalysisResponseError):
        _analyze(handler)


def test_analyze_without_key_makes_no_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=_gemini_body("{}"))

    with pytest.raises(AnalysisNotConfiguredError):
        _analyze(handler, api_key="")
    assert calls == []


def test_from_settings_copies_gemini_options() -> None:
    settings = Settings(gemini_api_key="abc", gemini_model="gemini-pro", gemini_timeout_seconds=5.0)
    analyzer = GeminiAnalyzer.from_settings(settings)

    assert analyzer.is_configured
    assert analyzer.timeout == 5.0
    assert analyzer.endpoint.endswith("/gemini-pro:generateContent")


# ── Keyword fallback ─────────────────────────────────────────────


def test_fallback_analysis_flags_urgent_work() -> None:
    analysis = build_fallback_analysis("URGENT meeting with client\nshort")

    assert analysis.summary.startswith("Extracted text contains 5 words.")
    assert "urgent indicators" in analysis.summary
    assert analysis.priority == Priority.HIGH
    assert analysis.category == AnalysisCategory.WORK
    assert analysis.key_points == ["URGENT meeting with client"]
    assert analysis.confidence == 0.6
    assert analysis.extracted_items.todos == []


def test_fallback_analysis_for_plain_text() -> None:
    analysis = build_fallback_analysis("walk the dog")

    assert analysis.priority == Priority.MEDIUM
    assert analysis.category == AnalysisCategory.OTHER
    assert analysis.key_points == ["walk the dog"]
