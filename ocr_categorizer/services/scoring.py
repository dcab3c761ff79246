"""Per-item confidence for rule-based extraction."""

from __future__ import annotations

from ocr_categorizer.schemas.items import Category
from ocr_categorizer.services.classifier import has_temporal_pattern, keyword_match_count

# OCR confidence is a ceiling; line classification adds its own uncertainty.
BASE_CONFIDENCE_WEIGHT = 0.8
KEYWORD_BONUS = 5.0
TEMPORAL_BONUS = 10.0
MAX_RULE_CONFIDENCE = 95.0


def score_line(line: str, category: Category, base_confidence: float) -> float:
    """
    Score one classified line on a 0-95 scale.

    Args:
        line: The trimmed line text.
        category: Category the classifier assigned.
        base_confidence: Whole-document recognition confidence (0-100).
    """
    score = base_confidence * BASE_CONFIDENCE_WEIGHT
    score += KEYWORD_BONUS * keyword_match_count(line, category)
    if has_temporal_pattern(line):
        score += TEMPORAL_BONUS
    return min(max(score, 0.0), MAX_RULE_CONFIDENCE)
