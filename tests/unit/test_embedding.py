"""
Unit tests for EmbeddingService.

The sentence-transformers model is patched out; these tests cover batching,
normalization flags, and argument handling without downloading weights.
"""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from slidesage.services.embedding import EmbeddingService


def _encode(batch: list[str], **_: object) -> MagicMock:
    vectors = MagicMock()
    vectors.tolist.return_value = [[float(len(text))] * 384 for text in batch]
    return vectors


@pytest.fixture()
def mock_model() -> Iterator[MagicMock]:
    with patch("slidesage.services.embedding.SentenceTransformer") as model_cls:
        model_cls.return_value.encode.side_effect = _encode
        yield model_cls


@pytest.fixture()
def embedding_service(mock_model: MagicMock) -> EmbeddingService:
    return EmbeddingService(batch_size=8)


def test_defaults_from_settings(mock_model: MagicMock) -> None:
    service = EmbeddingService()
    mock_model.assert_called_once_with("all-MiniLM-L6-v2")
    assert service.model_name == "all-MiniLM-L6-v2"
    assert service.dimension == 384


# --- Batch processing ---


def test_embed_texts_batches_and_keeps_order(
    embedding_service: EmbeddingService, mock_model: MagicMock
) -> None:
    texts = [f"Slide {i} shows a {'x' * i} allocation shift." for i in range(20)]

    embeddings = embedding_service.embed_texts(texts)

    encode = mock_model.return_value.encode
    assert encode.call_count == 3  # 8 + 8 + 4
    assert [len(call.args[0]) for call in encode.call_args_list] == [8, 8, 4]
    assert [emb[0] for emb in embeddings] == [float(len(t)) for t in texts]
    assert all(len(emb) == 384 for emb in embeddings)


def test_embeddings_are_normalized(
    embedding_service: EmbeddingService, mock_model: MagicMock
) -> None:
    embedding_service.embed_texts(["Equities returned 12% in Q3."])
    kwargs = mock_model.return_value.encode.call_args.kwargs
    assert kwargs["normalize_embeddings"] is True
    assert kwargs["show_progress_bar"] is False


# --- Edge cases ---


def test_embed_texts_empty_raises(embedding_service: EmbeddingService) -> None:
    with pytest.raises(ValueError, match="empty"):
        embedding_service.embed_texts([])


def test_embed_query_returns_single_vector(embedding_service: EmbeddingService) -> None:
    vector = embedding_service.embed_query("best asset class")
    assert vector == [float(len("best asset class"))] * 384
