"""
Chunking Schemas

Pydantic schemas for reader paragraphs, granular chunks, and retrieved chunks.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from slidesage.models.chunk import HIERARCHY_BY_CHUNK_TYPE, ChunkType, HierarchyLevel

UNKNOWN_SLIDE = "Unknown"


class Paragraph(BaseModel):
    """One unit of text emitted by the external document reader.

    Attributes:
        text: Raw paragraph text.
        metadata: Reader metadata; ``slide`` and ``page`` carry provenance.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)


class ChunkMetadata(BaseModel):
    """Provenance and content-analysis metadata attached to every chunk.

    Keys from the source paragraph's metadata that are not named here are
    carried through as extra fields.

    Attributes:
        source_filename: Source filename of the ingested document.
        slide_number: Resolved provenance label, or "Unknown".
        chunk_type: Extraction granularity.
        hierarchy_level: Importance tag; must match chunk_type.
        paragraph_index: 0-based index of the source paragraph.
        sub_index: Position within the paragraph. Unset on paragraph chunks.
        parent_paragraph: Equal to paragraph_index; set iff sub_index is set.
        content_length: Character length of the chunk text.
        contains_numbers: Text holds a numeric/financial token.
        contains_percentages: Text holds a "%".
        contains_currency: Text holds a "$".
        contains_financial_data: Set only on numerical_data chunks.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    source_filename: str
    slide_number: str = Field(min_length=1)
    chunk_type: ChunkType
    hierarchy_level: HierarchyLevel
    paragraph_index: int = Field(ge=0)
    sub_index: int | None = Field(default=None, ge=0)
    parent_paragraph: int | None = None
    content_length: int = Field(ge=0)
    contains_numbers: bool
    contains_percentages: bool
    contains_currency: bool
    contains_financial_data: bool | None = None

    @model_validator(mode="after")
    def _check_taxonomy(self) -> "ChunkMetadata":
        expected_level = HIERARCHY_BY_CHUNK_TYPE[self.chunk_type]
        if self.hierarchy_level != expected_level:
            raise ValueError(
                f"{self.chunk_type} chunks must be {expected_level}, got {self.hierarchy_level}"
            )
        is_paragraph = self.chunk_type == ChunkType.PARAGRAPH
        if is_paragraph != (self.sub_index is None):
            raise ValueError("sub_index must be unset exactly on paragraph chunks")
        expected_parent = None if self.sub_index is None else self.paragraph_index
        if self.parent_paragraph != expected_parent:
            raise ValueError("parent_paragraph must equal paragraph_index when sub_index is set")
        return self


class Chunk(BaseModel):
    """Output of the granular chunking process for a single chunk."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    metadata: ChunkMetadata

    def metadata_dict(self) -> dict[str, Any]:
        """Flat metadata mapping as handed to the vector index.

        Optional fields that were never set are omitted, so paragraph chunks
        carry no ``sub_index`` key and only numerical chunks carry
        ``contains_financial_data``.
        """
        return self.metadata.model_dump(exclude_unset=True)


class RetrievedChunk(BaseModel):
    """A chunk as returned by the vector index at query time.

    Attributes:
        text: Stored chunk text.
        metadata: Stored metadata mapping; keys may be missing.
        similarity: Similarity score reported by the index, if any.
    """

    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    similarity: float | None = None
