"""
Slide Resolver

Determines the provenance label for a paragraph, preferring reader metadata
over slide numbers mined from the text itself.
"""

from collections.abc import Mapping
from typing import Any

from slidesage.schemas.chunking import UNKNOWN_SLIDE
from slidesage.services.patterns import find_slide_mention

# Reader metadata keys checked in priority order
_PROVENANCE_KEYS: tuple[str, ...] = ("slide", "page")


def resolve_slide_number(content: str, metadata: Mapping[str, Any]) -> str:
    """Resolve the best-known slide label for a piece of text.

    Resolution order (first hit wins):
        1. ``slide`` then ``page`` metadata value, if present and not blank.
        2. A "Slide N" mention in ``content``.
        3. The "Unknown" sentinel.

    Args:
        content: Paragraph text.
        metadata: Reader metadata for the paragraph.

    Returns:
        Slide label as a string. Never raises.
    """
    for key in _PROVENANCE_KEYS:
        value = metadata.get(key)
        if value is None:
            continue
        label = str(value).strip()
        if label:
            return label

    mentioned = find_slide_mention(content)
    if mentioned is not None:
        return mentioned

    return UNKNOWN_SLIDE
