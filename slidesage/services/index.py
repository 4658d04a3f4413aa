"""
pgvector Chunk Index

ChunkIndex implementation backed by PostgreSQL + pgvector. Chunk text is
embedded as-is and the full metadata mapping is stored verbatim as JSONB.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from slidesage.models.chunk import ChunkRecord
from slidesage.repositories.chunk import ChunkRepository
from slidesage.schemas.chunking import Chunk, RetrievedChunk
from slidesage.services.embedding import EmbeddingService

logger = logging.getLogger(__name__)


class PgVectorChunkIndex:
    """Stores granular chunks with embeddings and serves similarity search.

    Re-ingesting a filename replaces its previous chunks.

    Args:
        session: Async DB session for the unit of work.
        embedding_service: Pre-initialized EmbeddingService (model loaded once).
    """

    def __init__(self, session: AsyncSession, embedding_service: EmbeddingService) -> None:
        self._session = session
        self._embedding_service = embedding_service
        self._repository = ChunkRepository(session)

    async def upsert(self, chunks: list[Chunk]) -> int:
        """Embed and persist chunks, replacing earlier chunks of the same files.

        Args:
            chunks: Chunks from the granular chunker.

        Returns:
            Number of chunks stored.
        """
        if not chunks:
            return 0

        for filename in dict.fromkeys(chunk.metadata.source_filename for chunk in chunks):
            await self._repository.delete_by_filename(filename)

        embeddings = self._embedding_service.embed_texts([chunk.text for chunk in chunks])

        records = [
            ChunkRecord(
                source_filename=chunk.metadata.source_filename,
                slide_number=chunk.metadata.slide_number,
                chunk_type=chunk.metadata.chunk_type,
                hierarchy_level=chunk.metadata.hierarchy_level,
                paragraph_index=chunk.metadata.paragraph_index,
                sub_index=chunk.metadata.sub_index,
                content=chunk.text,
                embedding=embedding,
                metadata_=chunk.metadata.model_dump(mode="json", exclude_unset=True),
            )
            for chunk, embedding in zip(chunks, embeddings, strict=True)
        ]
        await self._repository.create_many(records)
        await self._session.commit()

        logger.info("Stored %d chunks in pgvector index", len(records))
        return len(records)

    async def search(self, query: str, top_k: int) -> list[RetrievedChunk]:
        """Return the top_k chunks closest to the query, best first."""
        embedding = self._embedding_service.embed_query(query)
        matches = await self._repository.search_by_cosine_similarity(embedding, top_k=top_k)

        return [
            RetrievedChunk(
                text=record.content,
                metadata=dict(record.metadata_),
                similarity=similarity,
            )
            for record, similarity in matches
        ]
