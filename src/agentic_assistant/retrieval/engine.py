# src/agentic_assistant/retrieval/engine.py

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from agentic_assistant.adapters import EmbeddingAdapter
from agentic_assistant.errors import EmbeddingError
from agentic_assistant.retrieval.chunking import (
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_SIZE,
    chunk_text,
    validate_chunking,
)
from agentic_assistant.retrieval.index import VectorIndex
from agentic_assistant.retrieval.state import DocumentChunk, ScoredChunk
from agentic_assistant.utils import observe

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3


class RetrievalEngine:
    """Chunks and embeds documents on ingest, ranks stored chunks on query.

    Also keeps each document's full text so capabilities (summarization) can look it up
    by source id. Embedding failures never raise out of `ingest` or `query`.
    """

    def __init__(
        self,
        embedder: EmbeddingAdapter,
        *,
        index: Optional[VectorIndex] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        max_workers: int = 4,
    ):
        validate_chunking(chunk_size, chunk_overlap)
        self.embedder = embedder
        self.index = index if index is not None else VectorIndex()
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.max_workers = max(1, int(max_workers))

        self._documents: Dict[str, str] = {}
        self._documents_lock = threading.Lock()

    # -------------------------
    # Documents
    # -------------------------

    def source_ids(self) -> List[str]:
        with self._documents_lock:
            return list(self._documents)

    def document_text(self, source_id: str) -> Optional[str]:
        with self._documents_lock:
            return self._documents.get(source_id)

    def _embed_one(self, text: str) -> Optional[Tuple[float, ...]]:
        try:
            return tuple(self.embedder.embed(text))
        except EmbeddingError as e:
            logger.warning(f"Dropping chunk, embedding failed: {e}")
            return None

    def _embed_chunks(self, source_id: str, chunks: Sequence[str]) -> List[DocumentChunk]:
        if not chunks:
            return []

        embeddings: Dict[int, Optional[Tuple[float, ...]]] = {}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(chunks))) as pool:
            futures = {pool.submit(self._embed_one, text): i for i, text in enumerate(chunks)}
            for future in as_completed(futures):
                embeddings[futures[future]] = future.result()

        # Rebuild in chunk order; failed chunks are never stored.
        return [
            DocumentChunk(source_id=source_id, text=text, embedding=embeddings[i])
            for i, text in enumerate(chunks)
            if embeddings[i]
        ]

    def _drop_mismatched(
        self, batch: List[DocumentChunk], dimension: Optional[int], counts: Dict[str, int]
    ) -> List[DocumentChunk]:
        # The index dimension wins; an empty index takes the first embedded chunk's.
        if dimension is None and batch:
            dimension = batch[0].dimension

        kept: List[DocumentChunk] = []
        for chunk in batch:
            if chunk.dimension != dimension:
                logger.warning(
                    f"Dropping chunk from {chunk.source_id!r}: embedding has dimension {chunk.dimension}, "
                    f"expected {dimension}"
                )
                counts[chunk.source_id] -= 1
                continue
            kept.append(chunk)
        return kept

    @observe
    def ingest(self, source_id: str, text: str) -> int:
        """Index one document. Re-ingesting a source id replaces its chunks. Returns chunks stored."""
        return self.ingest_many({source_id: text})[source_id]

    @observe
    def ingest_many(self, documents: Mapping[str, str]) -> Dict[str, int]:
        """Index several documents; the whole batch lands in the index as one atomic write."""
        t_start = time.monotonic()
        counts: Dict[str, int] = {}
        batch: List[DocumentChunk] = []
        texts: Dict[str, str] = {}
        totals: Dict[str, int] = {}

        for source_id, text in documents.items():
            if not text:
                logger.warning(f"Skipping {source_id!r}: no extracted text")
                counts[source_id] = 0
                continue

            chunks = list(chunk_text(text, size=self.chunk_size, overlap=self.chunk_overlap))
            embedded = self._embed_chunks(source_id, chunks)
            batch.extend(embedded)
            texts[source_id] = text
            counts[source_id] = len(embedded)
            totals[source_id] = len(chunks)

        if texts:
            batch = self._drop_mismatched(batch, self.index.dimension_after_replacing(texts.keys()), counts)
            for source_id, total in totals.items():
                if counts[source_id] < total:
                    logger.warning(f"{source_id!r}: {total - counts[source_id]} of {total} chunks could not be embedded")

            self.index.replace(texts.keys(), batch)
            with self._documents_lock:
                self._documents.update(texts)

        logger.info(
            f"Ingested {len(batch)} chunks from {len(texts)} documents in {time.monotonic() - t_start:.2f}s"
        )
        return counts

    def remove(self, source_id: str) -> int:
        """Delete a document and all its chunks. No-op for unknown ids."""
        with self._documents_lock:
            self._documents.pop(source_id, None)
        return self.index.remove(source_id)

    # -------------------------
    # Query
    # -------------------------

    @observe
    def query(self, text: str, k: int = DEFAULT_TOP_K) -> List[ScoredChunk]:
        """Top-k chunks for `text`. Empty when the index is empty or the query cannot be embedded."""
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")

        if len(self.index) == 0 or k == 0:
            return []

        try:
            embedding = self.embedder.embed(text)
        except EmbeddingError as e:
            logger.warning(f"Query embedding failed, returning no context: {e}")
            return []

        try:
            hits = self.index.query(embedding, k=k)
        except ValueError as e:
            logger.warning(f"Query embedding rejected by index: {e}")
            return []

        logger.info(f"Retrieved {len(hits)} chunks (k={k}) from {len(self.index)} indexed")
        return hits
