"""Split raw OCR text into candidate item lines."""

from __future__ import annotations

MIN_LINE_CHARS = 3


def segment_lines(text: str, min_chars: int = MIN_LINE_CHARS) -> list[str]:
    """
    Return trimmed lines in reading order.

    Lines with fewer than ``min_chars`` non-whitespace characters are
    dropped; they are OCR noise (stray bullets, single glyphs).
    """
    lines: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if sum(1 for ch in line if not ch.isspace()) < min_chars:
            continue
        lines.append(line)
    return lines
