"""
Pattern Library

Text-recognition rules shared by every chunk extractor, kept as compiled
regular expressions so each rule can be exercised in isolation. All patterns are
ASCII-only: digit and whitespace classes do not match other scripts' digits or non-breaking spaces.
"""

import re
from collections.abc import Iterator

# Boundary after ".", "!" or "?" when whitespace is followed by an upper-case letter
SENTENCE_BOUNDARY_PATTERN = re.compile(r"(?<=[.!?])\s+(?=[A-Z])", re.ASCII)

# Explicit "Slide 12" mention; group 1 is the slide number
SLIDE_NUMBER_PATTERN = re.compile(r"Slide\s+(\d+)", re.IGNORECASE | re.ASCII)

# Line with a label followed by at least two numeric / currency / percentage cells
TABLE_PATTERN = re.compile(r"^.+\s+[\d%$,.\-]+\s+[\d%$,.\-]+.*$", re.MULTILINE | re.ASCII)

# Bulleted ("•", "-", "*") or ordered ("1.") list line
LIST_PATTERN = re.compile(r"^\s*[•\-*]\s+.+$|^\s*\d+\.\s+.+$", re.MULTILINE | re.ASCII)

# Number with optional "%", dollar amount, or basis points
NUMBER_DATA_PATTERN = re.compile(
    r"\b\d+\.?\d*%?\b"
    r"|\$[\d,]+(?:\.\d{2})?\b"
    r"|\b[\d,]+\s*(?:bps|basis\s+points?)\b",
    re.IGNORECASE | re.ASCII,
)


def split_sentences(text: str) -> Iterator[str]:
    """Lazily yield the sentences of ``text``.

    Sentences are the spans between SENTENCE_BOUNDARY_PATTERN matches, untrimmed.
    Every call returns a fresh generator, so the split can be restarted.

    Args:
        text: Paragraph text to split.

    Yields:
        Sentence substrings in document order.
    """
    start = 0
    for boundary in SENTENCE_BOUNDARY_PATTERN.finditer(text):
        yield text[start : boundary.start()]
        start = boundary.end()
    yield text[start:]


def find_slide_mention(text: str) -> str | None:
    """Return the digits of the first "Slide N" mention, or None."""
    match = SLIDE_NUMBER_PATTERN.search(text)
    return match.group(1) if match else None


def contains_numbers(text: str) -> bool:
    """True if ``text`` holds at least one numeric or financial token."""
    return NUMBER_DATA_PATTERN.search(text) is not None


def contains_percentages(text: str) -> bool:
    return "%" in text


def contains_currency(text: str) -> bool:
    return "$" in text
