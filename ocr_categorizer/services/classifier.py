"""
Line classifier.

Precedence is an ordered list of ``(category, predicate)`` rules evaluated
top to bottom; the first rule whose predicate holds decides the category.
Achievements come first because their phrasing ("10 tasks completed")
would otherwise be absorbed by the generic todo vocabulary.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping, Sequence

from ocr_categorizer.schemas.items import Category
from ocr_categorizer.services.keywords import CATEGORY_KEYWORDS, TEMPORAL_PATTERNS

LinePredicate = Callable[[str], bool]


def contains_any(line: str, keywords: Sequence[str]) -> bool:
    lower = line.lower()
    return any(keyword in lower for keyword in keywords)


def keyword_match_count(
    line: str,
    category: Category,
    table: Mapping[Category, Sequence[str]] = CATEGORY_KEYWORDS,
) -> int:
    """Count how many of the category's keywords occur in the line."""
    lower = line.lower()
    return sum(1 for keyword in table.get(category, ()) if keyword in lower)


def has_temporal_pattern(
    line: str,
    patterns: Sequence[re.Pattern[str]] = TEMPORAL_PATTERNS,
) -> bool:
    return any(pattern.search(line) for pattern in patterns)


def _keyword_rule(category: Category) -> LinePredicate:
    keywords = CATEGORY_KEYWORDS[category]
    return lambda line: contains_any(line, keywords)


def _temporal_rule(category: Category) -> LinePredicate:
    if category == Category.REMINDER:
        return lambda line: has_temporal_pattern(line) and "remind" in line.lower()
    return has_temporal_pattern


CLASSIFICATION_RULES: tuple[tuple[Category, LinePredicate], ...] = (
    (Category.ACHIEVEMENT, _keyword_rule(Category.ACHIEVEMENT)),
    (Category.REMINDER, _keyword_rule(Category.REMINDER)),
    (Category.EVENT, _keyword_rule(Category.EVENT)),
    (Category.TODO, _keyword_rule(Category.TODO)),
    # Time-bearing lines with no category vocabulary
    (Category.REMINDER, _temporal_rule(Category.REMINDER)),
    (Category.EVENT, _temporal_rule(Category.EVENT)),
)


def classify(
    line: str,
    rules: Sequence[tuple[Category, LinePredicate]] = CLASSIFICATION_RULES,
) -> Category:
    """Assign a single category to one line; ``UNCATEGORIZED`` if no rule fires."""
    for category, predicate in rules:
        if predicate(line):
            return category
    return Category.UNCATEGORIZED
