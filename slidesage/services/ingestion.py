"""
Ingestion Service

Orchestrates granular ingestion of a slide deck or report:
read paragraphs → create granular chunks → upsert into the vector index.
"""

import logging

from slidesage.schemas.answering import IngestionResult
from slidesage.services.chunking import GranularChunker
from slidesage.services.ports import ChunkIndex, DocumentReader

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Base exception for ingestion pipeline errors."""


class DocumentReadError(IngestionError):
    """Raised when the document reader cannot turn the upload into paragraphs."""


class EmptyDocumentError(IngestionError):
    """Raised when the reader finds no paragraphs in a document."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"No paragraphs found in document: {filename}")


class IngestionService:
    """Runs the granular ingestion pipeline for a single document.

    Pipeline steps:
        1. Read the raw bytes into paragraphs (external reader)
        2. Create multi-level granular chunks
        3. Embed and store the chunks (external index)

    Args:
        reader: Paragraph-level document reader.
        index: Vector index that accepts the chunks.
        chunker: Granular chunker. Defaults to a GranularChunker with settings.
    """

    def __init__(
        self,
        reader: DocumentReader,
        index: ChunkIndex,
        chunker: GranularChunker | None = None,
    ) -> None:
        self._reader = reader
        self._index = index
        self._chunker = chunker or GranularChunker()

    async def ingest(self, data: bytes, filename: str) -> IngestionResult:
        """Ingest one document into the vector index.

        Args:
            data: Raw document bytes.
            filename: Source filename, recorded on every chunk.

        Returns:
            IngestionResult with paragraph and chunk counts.

        Raises:
            DocumentReadError: If the reader fails or yields invalid paragraphs.
            EmptyDocumentError: If the reader yields no paragraphs.
            IngestionError: If the index rejects the chunks.
        """
        logger.info("Starting granular ingestion of document: %s", filename)

        try:
            paragraphs = self._reader.read(data, filename)
        except (OSError, ValueError) as exc:
            raise DocumentReadError(f"Failed to read document {filename}: {exc}") from exc

        if not paragraphs:
            raise EmptyDocumentError(filename)

        chunks = self._chunker.create_chunks(paragraphs, filename)

        try:
            stored = await self._index.upsert(chunks)
        except Exception as exc:
            logger.error("Failed to store chunks for %s", filename, exc_info=True)
            raise IngestionError(f"Failed to store chunks for {filename}: {exc}") from exc

        logger.info(
            "Document '%s' ingested with %d granular chunks (from %d source paragraphs)",
            filename,
            stored,
            len(paragraphs),
        )
        return IngestionResult(
            filename=filename,
            paragraph_count=len(paragraphs),
            chunk_count=stored,
        )
