"""
Ingestion and Answer Schemas

Pydantic schemas for the results of the ingestion and question-answering services.
"""

from pydantic import BaseModel, Field

from slidesage.schemas.chunking import RetrievedChunk


class IngestionResult(BaseModel):
    """Summary of one ingested document.

    Attributes:
        filename: Source document filename.
        paragraph_count: Paragraphs produced by the reader.
        chunk_count: Granular chunks stored in the index.
    """

    filename: str
    paragraph_count: int
    chunk_count: int


class Answer(BaseModel):
    """LLM answer with the context it was grounded on.

    Attributes:
        question: The user question.
        answer: LLM completion text.
        context: Rendered context block sent in the prompt.
        sources: Distinct slide labels of the retrieved chunks, first-seen order.
        chunks: Retrieved chunks, in ranking order.
    """

    question: str
    answer: str
    context: str
    sources: list[str] = Field(default_factory=list)
    chunks: list[RetrievedChunk] = Field(default_factory=list)
