"""
Answer Service

Question answering over ingested decks:
similarity search → context block → analyst prompt → LLM completion.
"""

import logging

from slidesage.core.config import settings
from slidesage.schemas.answering import Answer
from slidesage.services.context import build_context, chunk_metadata, slide_label
from slidesage.services.ports import ChunkIndex, LanguageModel
from slidesage.services.prompts import build_prompt

logger = logging.getLogger(__name__)


class AnswerError(Exception):
    """Base exception for question-answering errors."""


class RetrievalError(AnswerError):
    """Raised when the vector index search fails."""


class AnswerService:
    """Answers questions with slide-cited analysis from retrieved chunks.

    Args:
        index: Vector index used for similarity search.
        llm: Language model that completes the prompt.
        top_k: Number of chunks to retrieve. Defaults to settings.DEFAULT_TOP_K.
    """

    def __init__(
        self,
        index: ChunkIndex,
        llm: LanguageModel,
        top_k: int | None = None,
    ) -> None:
        self._index = index
        self._llm = llm
        self._top_k = top_k if top_k is not None else settings.DEFAULT_TOP_K

        if self._top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {self._top_k}")

    @property
    def top_k(self) -> int:
        """Number of chunks retrieved per question."""
        return self._top_k

    async def answer(self, question: str) -> Answer:
        """Answer a question using the most similar chunks as context.

        Args:
            question: Natural-language question.

        Returns:
            Answer with the completion, rendered context, and cited slides.

        Raises:
            ValueError: If the question is blank.
            RetrievalError: If the similarity search fails.
            LLMClientError: If the LLM call fails.
        """
        question = question.strip()
        if not question:
            raise ValueError("Question must not be empty")

        try:
            chunks = await self._index.search(question, self._top_k)
        except Exception as exc:
            logger.error("Similarity search failed for question: %s", question, exc_info=True)
            raise RetrievalError(f"Similarity search failed: {exc}") from exc

        if not chunks:
            logger.warning("No chunks retrieved for question: %s", question)

        context = build_context(chunks)
        prompt = build_prompt(question, context)
        completion = await self._llm.complete(prompt)

        sources = list(dict.fromkeys(slide_label(chunk_metadata(chunk)) for chunk in chunks))
        logger.info("Answered question with %d chunks from slides %s", len(chunks), sources)

        return Answer(
            question=question,
            answer=completion,
            context=context,
            sources=sources,
            chunks=chunks,
        )
