"""
Chunk Extractors

Five independent strategies that scan one paragraph and emit tagged chunks:
paragraph, table row, list item, sentence, and numerical sentence.

Every extractor shares the same signature and never mutates the paragraph
metadata it is given; each chunk gets a freshly built metadata record.
"""

from collections.abc import Callable, Mapping
from typing import Any

from slidesage.core.config import settings
from slidesage.models.chunk import HIERARCHY_BY_CHUNK_TYPE, ChunkType
from slidesage.schemas.chunking import Chunk, ChunkMetadata
from slidesage.services.patterns import (
    LIST_PATTERN,
    TABLE_PATTERN,
    contains_currency,
    contains_numbers,
    contains_percentages,
    split_sentences,
)

Extractor = Callable[[str, Mapping[str, Any], str, str, int], list[Chunk]]


def build_chunk(
    text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    chunk_type: ChunkType,
    paragraph_index: int,
    sub_index: int | None = None,
    **extra: Any,
) -> Chunk:
    """Create a chunk with the full provenance and content-analysis metadata.

    Paragraph metadata keys are copied first; keys reserved by ChunkMetadata
    are never taken from the paragraph. Content flags are computed from
    ``text`` itself, not inherited from the paragraph.

    Args:
        text: Chunk text.
        paragraph_metadata: Reader metadata of the source paragraph.
        filename: Source document filename.
        slide_number: Resolved slide label.
        chunk_type: Extraction granularity.
        paragraph_index: Index of the source paragraph.
        sub_index: Position within the paragraph, None for paragraph chunks.
        **extra: Additional metadata fields (e.g. contains_financial_data).

    Returns:
        Immutable Chunk.
    """
    fields: dict[str, Any] = {
        key: value
        for key, value in paragraph_metadata.items()
        if key not in ChunkMetadata.model_fields
    }
    fields.update(
        source_filename=filename,
        slide_number=slide_number,
        chunk_type=chunk_type,
        hierarchy_level=HIERARCHY_BY_CHUNK_TYPE[chunk_type],
        paragraph_index=paragraph_index,
        content_length=len(text),
        contains_numbers=contains_numbers(text),
        contains_percentages=contains_percentages(text),
        contains_currency=contains_currency(text),
    )
    if sub_index is not None:
        fields["sub_index"] = sub_index
        fields["parent_paragraph"] = paragraph_index
    fields.update(extra)

    return Chunk(text=text, metadata=ChunkMetadata.model_validate(fields))


def extract_paragraph_chunks(
    paragraph_text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    paragraph_index: int,
) -> list[Chunk]:
    """Emit the whole paragraph as a single primary chunk."""
    return [
        build_chunk(
            paragraph_text,
            paragraph_metadata,
            filename,
            slide_number,
            ChunkType.PARAGRAPH,
            paragraph_index,
        )
    ]


def extract_table_chunks(
    paragraph_text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    paragraph_index: int,
) -> list[Chunk]:
    """Emit one chunk per table-like row longer than TABLE_ROW_MIN_LENGTH."""
    chunks: list[Chunk] = []
    for match in TABLE_PATTERN.finditer(paragraph_text):
        row = match.group().strip()
        if len(row) <= settings.TABLE_ROW_MIN_LENGTH:
            continue
        chunks.append(
            build_chunk(
                row,
                paragraph_metadata,
                filename,
                slide_number,
                ChunkType.TABLE_ROW,
                paragraph_index,
                sub_index=len(chunks),
            )
        )
    return chunks


def extract_list_chunks(
    paragraph_text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    paragraph_index: int,
) -> list[Chunk]:
    """Emit one chunk per bulleted or numbered item longer than LIST_ITEM_MIN_LENGTH."""
    chunks: list[Chunk] = []
    for match in LIST_PATTERN.finditer(paragraph_text):
        item = match.group().strip()
        if len(item) <= settings.LIST_ITEM_MIN_LENGTH:
            continue
        chunks.append(
            build_chunk(
                item,
                paragraph_metadata,
                filename,
                slide_number,
                ChunkType.LIST_ITEM,
                paragraph_index,
                sub_index=len(chunks),
            )
        )
    return chunks


def extract_sentence_chunks(
    paragraph_text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    paragraph_index: int,
) -> list[Chunk]:
    """Emit meaningful sentences of long paragraphs as tertiary chunks.

    Only paragraphs longer than SENTENCE_PARAGRAPH_MIN_LENGTH are split.
    ``sub_index`` is the sentence's position in the full split, so indices
    of kept sentences can be sparse.
    """
    if len(paragraph_text) <= settings.SENTENCE_PARAGRAPH_MIN_LENGTH:
        return []

    chunks: list[Chunk] = []
    for position, sentence in enumerate(split_sentences(paragraph_text)):
        sentence = sentence.strip()
        if len(sentence) <= settings.SENTENCE_MIN_LENGTH:
            continue
        chunks.append(
            build_chunk(
                sentence,
                paragraph_metadata,
                filename,
                slide_number,
                ChunkType.SENTENCE,
                paragraph_index,
                sub_index=position,
            )
        )
    return chunks


def extract_numerical_chunks(
    paragraph_text: str,
    paragraph_metadata: Mapping[str, Any],
    filename: str,
    slide_number: str,
    paragraph_index: int,
) -> list[Chunk]:
    """Emit sentences carrying numeric or financial tokens as analytical chunks.

    ``sub_index`` is the sentence's position in this extractor's own split.
    """
    chunks: list[Chunk] = []
    for position, sentence in enumerate(split_sentences(paragraph_text)):
        sentence = sentence.strip()
        if len(sentence) <= settings.NUMERICAL_SENTENCE_MIN_LENGTH:
            continue
        if not contains_numbers(sentence):
            continue
        chunks.append(
            build_chunk(
                sentence,
                paragraph_metadata,
                filename,
                slide_number,
                ChunkType.NUMERICAL_DATA,
                paragraph_index,
                sub_index=position,
                contains_financial_data=True,
            )
        )
    return chunks


# Fixed extraction order; the assembler appends outputs in this sequence.
EXTRACTORS: tuple[Extractor, ...] = (
    extract_paragraph_chunks,
    extract_table_chunks,
    extract_list_chunks,
    extract_sentence_chunks,
    extract_numerical_chunks,
)
