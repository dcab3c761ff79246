"""
Demo datasets.

Used when no recognizer or AI service is reachable, so the workflow can
still be exercised end to end (``scripts/categorize_text.py --demo``).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ocr_categorizer.schemas.analysis import GeminiAnalysis
from ocr_categorizer.schemas.recognition import (
    BoundingBox,
    RecognitionMetadata,
    RecognizedBlock,
    RecognizedText,
)
from ocr_categorizer.services.ai_analysis import GeminiAnalyzer
from ocr_categorizer.services.categorizer import reference_time

DEMO_TEXT = """Meeting with team tomorrow at 2 PM
Complete project proposal by Friday
Reminder: Doctor appointment next week
Achievement unlocked: 10 tasks completed!
Buy groceries: milk, bread, eggs
Call mom tonight
Deadline: Submit report by end of month"""


def _block(text: str, confidence: float, top: float, right: float) -> RecognizedBlock:
    return RecognizedBlock(
        text=text,
        confidence=confidence,
        bbox=BoundingBox(x0=10, y0=top, x1=right, y1=top + 25),
        baseline=BoundingBox(x0=10, y0=top + 20, x1=right, y1=top + 20),
    )


def demo_recognized_text() -> RecognizedText:
    return RecognizedText(
        text=DEMO_TEXT,
        confidence=85.5,
        blocks=[
            _block("Meeting with team tomorrow at 2 PM", 92.3, 20, 300),
            _block("Complete project proposal by Friday", 88.7, 50, 280),
            _block("Reminder: Doctor appointment next week", 91.2, 80, 320),
            _block("Achievement unlocked: 10 tasks completed!", 89.4, 110, 350),
        ],
        metadata=RecognitionMetadata(
            language="eng",
            processing_time_ms=2500,
            image_width=400,
            image_height=600,
        ),
    )


def demo_analysis(now: datetime) -> GeminiAnalysis:
    """A representative AI analysis of ``DEMO_TEXT``, dated relative to ``now``."""
    tomorrow = now + timedelta(days=1)
    return GeminiAnalysis.model_validate({
        "summary": (
            "The screenshot contains a mix of work tasks and personal reminders "
            "with several time-sensitive items requiring immediate attention."
        ),
        "keyPoints": [
            "Multiple deadlines identified for this week",
            "Important meeting scheduled for tomorrow",
            "Personal health appointment needs scheduling",
        ],
        "suggestedActions": [
            "Schedule the team meeting for tomorrow at 2 PM",
            "Set reminder for project deadline on Friday",
            "Book doctor appointment for next week",
            "Add grocery shopping to weekend tasks",
        ],
        "priority": "high",
        "category": "work",
        "confidence": 0.92,
        "extractedItems": {
            "todos": [
                {
                    "title": "Complete project proposal",
                    "description": "Finalize the Q1 project proposal with budget estimates and timeline",
                    "priority": "high",
                    "estimatedDuration": "2 hours",
                    "tags": ["work", "project", "deadline"],
                    "dueDate": (now + timedelta(days=2)).isoformat(),
                    "confidence": 0.95,
                },
                {
                    "title": "Buy groceries",
                    "description": "Weekly grocery shopping - milk, bread, eggs, vegetables",
                    "priority": "medium",
                    "estimatedDuration": "1 hour",
                    "tags": ["personal", "shopping"],
                    "confidence": 0.88,
                },
            ],
            "events": [
                {
                    "title": "Team meeting",
                    "description": "Weekly team sync to discuss project progress and blockers",
                    "startTime": tomorrow.isoformat(),
                    "endTime": (tomorrow + timedelta(hours=1)).isoformat(),
                    "location": "Conference Room A",
                    "attendees": ["John", "Sarah", "Mike"],
                    "type": "meeting",
                    "confidence": 0.93,
                },
            ],
            "reminders": [
                {
                    "title": "Doctor appointment",
                    "description": "Schedule annual health checkup",
                    "remindAt": (now + timedelta(days=7)).isoformat(),
                    "frequency": "once",
                    "priority": "medium",
                    "confidence": 0.85,
                },
            ],
        },
    })


class DemoAnalyzer(GeminiAnalyzer):
    """
    Analyzer that answers with ``demo_analysis`` instead of calling Gemini.

    Items are dated from ``now`` when given, so a fixed reference time gives
    a repeatable analysis.
    """

    def __init__(self, now: Optional[datetime] = None) -> None:
        super().__init__(api_key="demo", model="demo")
        self.now = now

    async def analyze(self, text: str, image_context: Optional[str] = None) -> GeminiAnalysis:
        return demo_analysis(reference_time(self.now))
