"""
Chunk Repository

Database access layer for granular chunk storage and vector similarity search.
All SQL operations go through this repository, never through services.
"""

import logging

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from slidesage.models.chunk import ChunkRecord

logger = logging.getLogger(__name__)

_SIMILARITY_QUERY = text("""
    SELECT id, (1 - (embedding <=> CAST(:embedding AS vector))) AS similarity
    FROM granular_chunks
    ORDER BY embedding <=> CAST(:embedding AS vector)
    LIMIT :top_k
""")


class ChunkRepository:
    """Repository for ChunkRecord inserts, deletes, and cosine-similarity queries.

    Args:
        session: Async SQLAlchemy session (injected per unit of work).
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_many(self, records: list[ChunkRecord]) -> list[ChunkRecord]:
        """Bulk-insert chunk records.

        Args:
            records: ChunkRecord instances to persist.

        Returns:
            The same list, now tracked by the session.
        """
        self._session.add_all(records)
        await self._session.flush()
        logger.info("Inserted %d chunk records", len(records))
        return records

    async def search_by_cosine_similarity(
        self,
        embedding: list[float],
        top_k: int = 4,
    ) -> list[tuple[ChunkRecord, float]]:
        """Find the most similar chunks using pgvector's cosine distance (<=>).

        Args:
            embedding: Query embedding vector.
            top_k: Number of results to return.

        Returns:
            (ChunkRecord, similarity) tuples, highest similarity first.
        """
        params: dict[str, object] = {
            "embedding": f"[{','.join(str(v) for v in embedding)}]",
            "top_k": top_k,
        }
        result = await self._session.execute(_SIMILARITY_QUERY, params)
        rows = result.fetchall()

        if not rows:
            return []

        ranked_ids = [row[0] for row in rows]
        similarity_by_id = {row[0]: float(row[1]) for row in rows}

        stmt = select(ChunkRecord).where(ChunkRecord.id.in_(ranked_ids))
        record_result = await self._session.execute(stmt)
        records_by_id = {record.id: record for record in record_result.scalars().all()}

        return [
            (records_by_id[record_id], similarity_by_id[record_id])
            for record_id in ranked_ids
            if record_id in records_by_id
        ]

    async def delete_by_filename(self, source_filename: str) -> int:
        """Delete every chunk of a previously ingested document.

        Args:
            source_filename: Filename the chunks were ingested under.

        Returns:
            Number of rows deleted.
        """
        stmt = delete(ChunkRecord).where(ChunkRecord.source_filename == source_filename)
        cursor = await self._session.execute(stmt)
        count = int(cursor.rowcount)  # type: ignore[attr-defined]
        logger.info("Deleted %d chunks for %s", count, source_filename)
        return count
