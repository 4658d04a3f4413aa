"""
Granular Chunking

Breaks reader paragraphs into overlapping granularities (paragraph, table row,
list item, sentence, numerical sentence) tagged with slide provenance.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from itertools import repeat

from slidesage.core.config import settings
from slidesage.schemas.chunking import Chunk, Paragraph
from slidesage.services.extractors import EXTRACTORS, Extractor
from slidesage.services.slides import resolve_slide_number

logger = logging.getLogger(__name__)


class GranularChunker:
    """Assembles the outputs of every extractor into one ordered chunk list.

    For each paragraph, in input order: the paragraph chunk, then table rows,
    list items, sentences (long paragraphs only) and numerical sentences.
    Paragraphs share no state, so they can be processed on a thread pool;
    results are flattened back in paragraph order.

    Args:
        max_workers: Worker threads across paragraphs. 1 runs sequentially.
            Defaults to settings.CHUNKING_MAX_WORKERS.
        extractors: Extractors to run per paragraph, in order.
            Defaults to the five built-in extractors.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        extractors: Sequence[Extractor] = EXTRACTORS,
    ) -> None:
        self._max_workers = max_workers if max_workers is not None else settings.CHUNKING_MAX_WORKERS
        self._extractors = tuple(extractors)

        if self._max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self._max_workers}")

    @property
    def max_workers(self) -> int:
        """Number of worker threads used across paragraphs."""
        return self._max_workers

    def create_chunks(self, paragraphs: Sequence[Paragraph], filename: str) -> list[Chunk]:
        """Create multi-level granular chunks for a whole document.

        Args:
            paragraphs: Reader paragraphs in document order.
            filename: Source document filename.

        Returns:
            Ordered list of chunks, at least one per paragraph.
        """
        if self._max_workers > 1 and len(paragraphs) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                # Executor.map yields results in submission order
                per_paragraph = list(
                    pool.map(
                        self.chunk_paragraph,
                        paragraphs,
                        repeat(filename),
                        range(len(paragraphs)),
                    )
                )
        else:
            per_paragraph = [
                self.chunk_paragraph(paragraph, filename, idx)
                for idx, paragraph in enumerate(paragraphs)
            ]

        chunks = [chunk for group in per_paragraph for chunk in group]

        type_counts = Counter(chunk.metadata.chunk_type.value for chunk in chunks)
        logger.info(
            "Created %d granular chunks from %d paragraphs of %s (%s)",
            len(chunks),
            len(paragraphs),
            filename,
            ", ".join(f"{name}={count}" for name, count in sorted(type_counts.items())),
        )
        return chunks

    def chunk_paragraph(self, paragraph: Paragraph, filename: str, paragraph_index: int) -> list[Chunk]:
        """Create the granular chunks of a single paragraph.

        Args:
            paragraph: Reader paragraph.
            filename: Source document filename.
            paragraph_index: Position of the paragraph in the document.

        Returns:
            Chunks in fixed extractor order.
        """
        content = paragraph.text
        slide_number = resolve_slide_number(content, paragraph.metadata)

        chunks: list[Chunk] = []
        for extractor in self._extractors:
            chunks.extend(
                extractor(content, paragraph.metadata, filename, slide_number, paragraph_index)
            )

        logger.debug(
            "Paragraph %d (slide %s) produced %d chunks",
            paragraph_index,
            slide_number,
            len(chunks),
        )
        return chunks
