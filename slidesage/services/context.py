"""
Retrieval Context Builder

Renders retrieved chunks into one context block, grouped per chunk with its
slide provenance, so the LLM can cite "[Source: Slide X]".
"""

from collections.abc import Mapping, Sequence
from typing import Any

from slidesage.schemas.chunking import UNKNOWN_SLIDE, Chunk, RetrievedChunk

_SECTION_HEADER = "--- Document Section ---"
_DEFAULT_CHUNK_TYPE = "content"


def chunk_metadata(chunk: Chunk | RetrievedChunk) -> dict[str, Any]:
    """Flat metadata mapping of an ingested or retrieved chunk."""
    if isinstance(chunk, Chunk):
        return chunk.metadata_dict()
    return chunk.metadata


def slide_label(metadata: Mapping[str, Any]) -> str:
    """Slide label for citation, falling back to raw reader keys.

    Uses ``slide_number`` unless it is missing or "Unknown", then ``slide``,
    then ``page``.
    """
    slide_number = metadata.get("slide_number")
    if slide_number is not None and str(slide_number) != UNKNOWN_SLIDE:
        return str(slide_number)
    for key in ("slide", "page"):
        value = metadata.get(key)
        if value is not None:
            return str(value)
    return UNKNOWN_SLIDE


def build_context(chunks: Sequence[Chunk | RetrievedChunk]) -> str:
    """Render chunks into a single context string, in the given order.

    Each chunk becomes::

        --- Document Section ---
        Slide: <slide>
        Type: <chunk_type or "content">
        Content: <text>

    followed by a blank line. The order is the index's ranking; nothing is re-ranked.

    Args:
        chunks: Chunks returned by the similarity search.

    Returns:
        Rendered context, or an empty string when there are no chunks.
    """
    sections: list[str] = []
    for chunk in chunks:
        metadata = chunk_metadata(chunk)
        chunk_type = metadata.get("chunk_type")
        sections.append(
            f"{_SECTION_HEADER}\n"
            f"Slide: {slide_label(metadata)}\n"
            f"Type: {chunk_type if chunk_type is not None else _DEFAULT_CHUNK_TYPE}\n"
            f"Content: {chunk.text}\n\n"
        )
    return "".join(sections)
