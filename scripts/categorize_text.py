"""
CLI tool to categorize OCR text into todos, events, reminders and achievements.

Usage:
    python scripts/categorize_text.py <path> [--confidence 85] [--ai]
    python scripts/categorize_text.py --demo [--mock-ai]

Examples:
    # Categorize a text file with the rule-based engine
    python scripts/categorize_text.py notes.txt

    # Read from stdin and try Gemini first (needs GEMINI_API_KEY)
    cat notes.txt | python scripts/categorize_text.py - --ai

    # Run the bundled demo capture through the offline demo analysis
    python scripts/categorize_text.py --demo --mock-ai
"""

import argparse
import asyncio
import json
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv
load_dotenv(".env.local")

from ocr_categorizer.logging_config import generate_trace_id, get_logger, setup_logging, trace_id_var
from ocr_categorizer.schemas.recognition import RecognizedText
from ocr_categorizer.services.demo_data import DemoAnalyzer, demo_recognized_text
from ocr_categorizer.services.workflow import default_analyzer, process_recognized_text

setup_logging()
logger = get_logger(__name__)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


async def categorize_text(
    recognized: RecognizedText,
    use_ai: bool = False,
    mock_ai: bool = False,
    image_context: str | None = None,
) -> dict:
    """Run one capture through the workflow and return the JSON-ready report."""
    trace_id_var.set(generate_trace_id())

    analyzer = None
    if mock_ai:
        analyzer = DemoAnalyzer()
    elif use_ai:
        analyzer = default_analyzer()
        if analyzer is None:
            logger.warning("ai_analysis_unavailable", reason="GEMINI_API_KEY not set or feature disabled")

    report = await process_recognized_text(
        recognized,
        analyzer=analyzer,
        image_context=image_context,
    )
    return report.model_dump(mode="json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Categorize OCR text into structured items")
    parser.add_argument("path", nargs="?", help="Text file to categorize, or - for stdin")
    parser.add_argument("--demo", action="store_true", help="Use the bundled demo capture")
    parser.add_argument("--confidence", type=float, default=85.0, help="Recognition confidence 0-100")
    parser.add_argument("--ai", action="store_true", help="Try Gemini analysis before the rule-based engine")
    parser.add_argument("--mock-ai", action="store_true", help="Use the offline demo analysis")
    parser.add_argument("--context", help="Optional image context passed to the AI prompt")

    args = parser.parse_args()

    if not args.path and not args.demo:
        parser.error("Provide a path (or -) or --demo")

    if args.demo:
        recognized = demo_recognized_text()
    else:
        try:
            text = _read_text(args.path)
        except OSError as e:
            parser.error(f"Cannot read {args.path}: {e}")
        recognized = RecognizedText(text=text, confidence=args.confidence)

    report = asyncio.run(categorize_text(
        recognized,
        use_ai=args.ai,
        mock_ai=args.mock_ai,
        image_context=args.context,
    ))
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
