"""
Embedding Service

Encodes chunk texts and questions with sentence-transformers (all-MiniLM-L6-v2).
Vectors are L2-normalized so cosine distance in pgvector ranks them directly.
"""

import logging

from sentence_transformers import SentenceTransformer

from slidesage.core.config import settings

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Loads the sentence-transformers model once and encodes text in batches.

    Args:
        model_name: HuggingFace model identifier.
            Defaults to settings.EMBEDDING_MODEL.
        batch_size: Number of texts to encode per batch.
            Defaults to settings.EMBEDDING_BATCH_SIZE.
    """

    def __init__(
        self,
        model_name: str | None = None,
        batch_size: int | None = None,
    ) -> None:
        self._model_name = model_name or settings.EMBEDDING_MODEL
        self._batch_size = batch_size or settings.EMBEDDING_BATCH_SIZE
        self._model = SentenceTransformer(self._model_name)
        self._dimension = settings.EMBEDDING_DIMENSION

        logger.info(
            "EmbeddingService initialized: model=%s, dimension=%d, batch_size=%d",
            self._model_name,
            self._dimension,
            self._batch_size,
        )

    @property
    def model_name(self) -> str:
        """Name of the loaded embedding model."""
        return self._model_name

    @property
    def dimension(self) -> int:
        """Dimension of the output embeddings."""
        return self._dimension

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for chunk texts, batch_size at a time.

        Args:
            texts: Texts to embed.

        Returns:
            One vector of length self.dimension per text.

        Raises:
            ValueError: If texts is empty.
        """
        if not texts:
            raise ValueError("Cannot embed an empty list of texts")

        embeddings: list[list[float]] = []
        for start in range(0, len(texts), self._batch_size):
            batch = texts[start : start + self._batch_size]
            vectors = self._model.encode(
                batch,
                show_progress_bar=False,
                normalize_embeddings=True,
            )
            embeddings.extend(vectors.tolist())

        logger.debug("Generated %d embeddings (dim=%d)", len(embeddings), self._dimension)
        return embeddings

    def embed_query(self, query: str) -> list[float]:
        """Embed a single search query."""
        return self.embed_texts([query])[0]
