"""
Capability Interfaces

Narrow protocols for the external collaborators: the paragraph-level document
reader, the vector index, and the LLM. Services depend on these only.
"""

from typing import Protocol

from slidesage.schemas.chunking import Chunk, Paragraph, RetrievedChunk


class DocumentReader(Protocol):
    def read(self, data: bytes, filename: str) -> list[Paragraph]:
        """Split a raw document into paragraphs with slide/page metadata."""
        ...


class ChunkIndex(Protocol):
    async def upsert(self, chunks: list[Chunk]) -> int:
        """Embed and persist chunks with their metadata; return the number stored."""
        ...

    async def search(self, query: str, top_k: int) -> list[RetrievedChunk]:
        """Return the top_k most similar chunks, best first."""
        ...


class LanguageModel(Protocol):
    async def complete(self, prompt: str) -> str:
        """Generate a completion for a fully rendered prompt."""
        ...
