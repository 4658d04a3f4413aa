"""
Chunk Model

Chunk taxonomy enums and the persisted form of a granular chunk with its embedding.
"""

import enum
import uuid
from datetime import UTC, datetime
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import Enum, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from slidesage.core.config import settings
from slidesage.models.base import Base


class ChunkType(enum.StrEnum):
    """Granularity a chunk was extracted at."""

    PARAGRAPH = "paragraph"
    TABLE_ROW = "table_row"
    LIST_ITEM = "list_item"
    SENTENCE = "sentence"
    NUMERICAL_DATA = "numerical_data"


class HierarchyLevel(enum.StrEnum):
    """Coarse importance tag derived from the chunk type."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    ANALYTICAL = "analytical"


HIERARCHY_BY_CHUNK_TYPE: dict[ChunkType, HierarchyLevel] = {
    ChunkType.PARAGRAPH: HierarchyLevel.PRIMARY,
    ChunkType.TABLE_ROW: HierarchyLevel.SECONDARY,
    ChunkType.LIST_ITEM: HierarchyLevel.SECONDARY,
    ChunkType.SENTENCE: HierarchyLevel.TERTIARY,
    ChunkType.NUMERICAL_DATA: HierarchyLevel.ANALYTICAL,
}


class ChunkRecord(Base):
    """
    Granular chunk persisted with its embedding.

    Fields:
        id: Unique identifier
        source_filename: Source filename of the ingested document
        slide_number: Resolved provenance label ("Unknown" if none)
        chunk_type: Extraction granularity
        hierarchy_level: Importance tag matching chunk_type
        paragraph_index: Index of the source paragraph
        sub_index: Position within the paragraph (NULL for paragraph chunks)
        content: Chunk text, embedded as-is
        embedding: Vector embedding (384-dim)
        metadata: Full chunk metadata mapping, stored verbatim
        created_at: Record creation timestamp
    """

    __tablename__ = "granular_chunks"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    source_filename: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    slide_number: Mapped[str] = mapped_column(String(64), nullable=False)
    chunk_type: Mapped[ChunkType] = mapped_column(Enum(ChunkType), nullable=False)
    hierarchy_level: Mapped[HierarchyLevel] = mapped_column(Enum(HierarchyLevel), nullable=False)
    paragraph_index: Mapped[int] = mapped_column(Integer, nullable=False)
    sub_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[Any] = mapped_column(Vector(settings.EMBEDDING_DIMENSION), nullable=False)
    metadata_: Mapped[dict[str, Any]] = mapped_column("metadata", JSONB, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, default=lambda: datetime.now(UTC).replace(tzinfo=None)
    )

    def __repr__(self) -> str:
        return (
            f"<ChunkRecord {self.chunk_type} p{self.paragraph_index}"
            f" slide={self.slide_number} id={self.id}>"
        )
