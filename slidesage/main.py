"""
Application Entry Point

Wires the pgvector index, embedding model, and Gemini client into the
ingestion and answer services. HTTP and upload handling live outside this package.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from slidesage.clients.gemini import GeminiClient
from slidesage.core.database import AsyncSessionLocal, engine, init_db
from slidesage.core.logging import setup_logging
from slidesage.schemas.answering import Answer, IngestionResult
from slidesage.services.answering import AnswerService
from slidesage.services.embedding import EmbeddingService
from slidesage.services.index import PgVectorChunkIndex
from slidesage.services.ingestion import IngestionService
from slidesage.services.ports import DocumentReader

# Module-level singleton: model loaded once, reused across calls
_embedding_service: EmbeddingService | None = None


def _get_embedding_service() -> EmbeddingService:
    """Lazy-init singleton for the embedding service."""
    global _embedding_service  # noqa: PLW0603
    if _embedding_service is None:
        _embedding_service = EmbeddingService()
    return _embedding_service


@asynccontextmanager
async def lifespan() -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Handles:
    - Startup: Logging setup, database initialization
    - Shutdown: Engine disposal
    """
    setup_logging()
    await init_db()
    try:
        yield
    finally:
        await engine.dispose()


async def ingest_document(reader: DocumentReader, data: bytes, filename: str) -> IngestionResult:
    """Read, chunk, embed, and store one document."""
    async with AsyncSessionLocal() as session:
        index = PgVectorChunkIndex(session, _get_embedding_service())
        return await IngestionService(reader=reader, index=index).ingest(data, filename)


async def answer_question(question: str) -> Answer:
    """Answer a question from the ingested decks with slide citations."""
    async with AsyncSessionLocal() as session, GeminiClient() as llm:
        index = PgVectorChunkIndex(session, _get_embedding_service())
        return await AnswerService(index=index, llm=llm).answer(question)
