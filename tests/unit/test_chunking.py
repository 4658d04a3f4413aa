"""
Unit tests for granular chunk assembly.

Tests extractor ordering, per-paragraph provenance, idempotence, the
thread-pool path, and schema invariants on the produced chunks.
"""

import pytest
from conftest import (
    DURATION_SENTENCE,
    EMERGING_SENTENCE,
    LIST_ITEM,
    LONG_PARAGRAPH,
    OPENING,
    RETURNS_SENTENCE,
    SHORT_PARAGRAPH,
)
from pydantic import ValidationError

from slidesage.models.chunk import ChunkType, HierarchyLevel
from slidesage.schemas.chunking import Chunk, ChunkMetadata, Paragraph
from slidesage.services.chunking import GranularChunker

FILENAME = "2019-asset-class-review.pdf"


@pytest.fixture()
def chunker() -> GranularChunker:
    """Sequential GranularChunker."""
    return GranularChunker(max_workers=1)


# --- Assembly order ---


def test_two_paragraph_document_order(
    chunker: GranularChunker, two_paragraph_deck: list[Paragraph]
) -> None:
    """Paragraph, list, sentence, then numerical chunks, paragraph by paragraph."""
    chunks = chunker.create_chunks(two_paragraph_deck, FILENAME)

    layout = [
        (c.metadata.paragraph_index, c.metadata.chunk_type, c.metadata.sub_index) for c in chunks
    ]
    assert layout == [
        (0, ChunkType.PARAGRAPH, None),
        (1, ChunkType.PARAGRAPH, None),
        (1, ChunkType.LIST_ITEM, 0),
        (1, ChunkType.SENTENCE, 0),
        (1, ChunkType.SENTENCE, 1),
        (1, ChunkType.SENTENCE, 2),
        (1, ChunkType.SENTENCE, 3),
        (1, ChunkType.NUMERICAL_DATA, 1),
    ]
    assert [c.text for c in chunks] == [
        SHORT_PARAGRAPH,
        LONG_PARAGRAPH,
        LIST_ITEM,
        f"{OPENING}\n{LIST_ITEM}",
        RETURNS_SENTENCE,
        EMERGING_SENTENCE,
        DURATION_SENTENCE,
        RETURNS_SENTENCE,
    ]


def test_provenance_shared_per_paragraph(
    chunker: GranularChunker, two_paragraph_deck: list[Paragraph]
) -> None:
    chunks = chunker.create_chunks(two_paragraph_deck, FILENAME)
    slides = {(c.metadata.paragraph_index, c.metadata.slide_number) for c in chunks}
    assert slides == {(0, "1"), (1, "2")}
    assert all(c.metadata.source_filename == FILENAME for c in chunks)
    assert all(c.metadata_dict()["file_name"] == "deck.pdf" for c in chunks)


def test_every_paragraph_has_exactly_one_paragraph_chunk(chunker: GranularChunker) -> None:
    paragraphs = [
        Paragraph(text="x"),
        Paragraph(text="   "),
        Paragraph(text="Slide 9: Equities        12.4%        8,900"),
    ]
    chunks = chunker.create_chunks(paragraphs, FILENAME)

    for idx, paragraph in enumerate(paragraphs):
        primary = [
            c
            for c in chunks
            if c.metadata.paragraph_index == idx and c.metadata.chunk_type == ChunkType.PARAGRAPH
        ]
        assert len(primary) == 1
        assert primary[0].text == paragraph.text


def test_slide_mined_from_text_without_metadata(chunker: GranularChunker) -> None:
    chunks = chunker.create_chunks(
        [Paragraph(text="Slide 9: Equities        12.4%        8,900")], FILENAME
    )
    assert {c.metadata.slide_number for c in chunks} == {"9"}
    assert [c.metadata.chunk_type for c in chunks] == [
        ChunkType.PARAGRAPH,
        ChunkType.TABLE_ROW,
        ChunkType.NUMERICAL_DATA,
    ]


def test_unknown_slide_when_no_provenance(chunker: GranularChunker) -> None:
    chunks = chunker.create_chunks([Paragraph(text="No slide info here.")], FILENAME)
    assert chunks[0].metadata.slide_number == "Unknown"


def test_flags_computed_per_chunk(
    chunker: GranularChunker, two_paragraph_deck: list[Paragraph]
) -> None:
    """Content flags come from each chunk's own text, not from its paragraph."""
    chunks = chunker.create_chunks(two_paragraph_deck, FILENAME)
    paragraph_chunk = chunks[1]
    list_chunk = chunks[2]
    assert paragraph_chunk.metadata.contains_percentages is True
    assert list_chunk.metadata.contains_percentages is False
    assert list_chunk.metadata.contains_numbers is False
    assert all(c.metadata.content_length == len(c.text) for c in chunks)


def test_empty_document_produces_no_chunks(chunker: GranularChunker) -> None:
    assert chunker.create_chunks([], FILENAME) == []


# --- Determinism ---


def test_assembly_is_idempotent(
    chunker: GranularChunker, two_paragraph_deck: list[Paragraph]
) -> None:
    first = chunker.create_chunks(two_paragraph_deck, FILENAME)
    second = chunker.create_chunks(two_paragraph_deck, FILENAME)
    assert [c.model_dump() for c in first] == [c.model_dump() for c in second]


def test_thread_pool_preserves_order(two_paragraph_deck: list[Paragraph]) -> None:
    paragraphs = two_paragraph_deck * 10
    sequential = GranularChunker(max_workers=1).create_chunks(paragraphs, FILENAME)
    parallel = GranularChunker(max_workers=4).create_chunks(paragraphs, FILENAME)
    assert [c.model_dump() for c in parallel] == [c.model_dump() for c in sequential]
    assert [c.metadata.paragraph_index for c in parallel if c.metadata.sub_index is None] == list(
        range(20)
    )


def test_invalid_max_workers() -> None:
    with pytest.raises(ValueError, match="max_workers"):
        GranularChunker(max_workers=0)


def test_max_workers_defaults_to_settings() -> None:
    assert GranularChunker().max_workers == 1


def test_custom_extractor_set(two_paragraph_deck: list[Paragraph]) -> None:
    from slidesage.services.extractors import extract_paragraph_chunks

    chunks = GranularChunker(extractors=[extract_paragraph_chunks]).create_chunks(
        two_paragraph_deck, FILENAME
    )
    assert [c.metadata.chunk_type for c in chunks] == [ChunkType.PARAGRAPH, ChunkType.PARAGRAPH]


# --- Schema invariants ---


def _metadata(**overrides: object) -> dict[str, object]:
    fields: dict[str, object] = {
        "source_filename": FILENAME,
        "slide_number": "1",
        "chunk_type": ChunkType.PARAGRAPH,
        "hierarchy_level": HierarchyLevel.PRIMARY,
        "paragraph_index": 0,
        "content_length": 4,
        "contains_numbers": False,
        "contains_percentages": False,
        "contains_currency": False,
    }
    fields.update(overrides)
    return fields


def test_mismatched_hierarchy_rejected() -> None:
    with pytest.raises(ValidationError):
        ChunkMetadata.model_validate(_metadata(hierarchy_level=HierarchyLevel.TERTIARY))


def test_paragraph_with_sub_index_rejected() -> None:
    with pytest.raises(ValidationError):
        ChunkMetadata.model_validate(_metadata(sub_index=0, parent_paragraph=0))


def test_sub_chunk_without_sub_index_rejected() -> None:
    with pytest.raises(ValidationError):
        ChunkMetadata.model_validate(
            _metadata(chunk_type=ChunkType.SENTENCE, hierarchy_level=HierarchyLevel.TERTIARY)
        )


def test_parent_paragraph_must_match() -> None:
    with pytest.raises(ValidationError):
        ChunkMetadata.model_validate(
            _metadata(
                chunk_type=ChunkType.LIST_ITEM,
                hierarchy_level=HierarchyLevel.SECONDARY,
                paragraph_index=2,
                sub_index=0,
                parent_paragraph=1,
            )
        )


def test_empty_chunk_text_rejected() -> None:
    with pytest.raises(ValidationError):
        Chunk(text="", metadata=ChunkMetadata.model_validate(_metadata()))


def test_empty_paragraph_rejected() -> None:
    with pytest.raises(ValidationError):
        Paragraph(text="")


def test_chunks_are_immutable(chunker: GranularChunker) -> None:
    chunk = chunker.create_chunks([Paragraph(text="Frozen text")], FILENAME)[0]
    with pytest.raises(ValidationError):
        chunk.text = "changed"  # type: ignore[misc]


def test_blank_provenance_still_yields_paragraph_chunk(chunker: GranularChunker) -> None:
    chunks = chunker.create_chunks(
        [
            Paragraph(text="Quarterly review text", metadata={"slide": ""}),
            Paragraph(text="Allocation recap", metadata={"slide": "", "page": 4}),
        ],
        FILENAME,
    )

    assert [c.metadata.chunk_type for c in chunks] == [ChunkType.PARAGRAPH, ChunkType.PARAGRAPH]
    assert [c.metadata.slide_number for c in chunks] == ["Unknown", "4"]
