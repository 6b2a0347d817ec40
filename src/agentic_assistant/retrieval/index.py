# src/agentic_assistant/retrieval/index.py

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional, Sequence

import numpy as np

from agentic_assistant.retrieval.state import DocumentChunk, ScoredChunk

logger = logging.getLogger(__name__)


class VectorIndex:
    """In-memory store of embedded chunks with dot-product nearest-neighbour queries.

    All chunks share one embedding dimension, fixed by the first chunk stored. Writes are
    applied as whole batches under a lock, so a concurrent query sees all or none of a batch.
    """

    def __init__(self):
        self._chunks: List[DocumentChunk] = []
        self._dimension: Optional[int] = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    def chunks(self) -> List[DocumentChunk]:
        with self._lock:
            return list(self._chunks)

    def source_ids(self) -> List[str]:
        with self._lock:
            return list(dict.fromkeys(c.source_id for c in self._chunks))

    def dimension_after_replacing(self, source_ids: Iterable[str]) -> Optional[int]:
        """Dimension the index would keep once every chunk of `source_ids` is dropped."""
        drop = set(source_ids)
        with self._lock:
            if any(c.source_id not in drop for c in self._chunks):
                return self._dimension
            return None

    def _check_batch(self, batch: Sequence[DocumentChunk]) -> Optional[int]:
        dimension = self._dimension
        for chunk in batch:
            if chunk.dimension == 0:
                raise ValueError(f"Chunk from {chunk.source_id!r} has an empty embedding")
            if dimension is None:
                dimension = chunk.dimension
            elif chunk.dimension != dimension:
                raise ValueError(
                    f"Chunk from {chunk.source_id!r} has dimension {chunk.dimension}, index expects {dimension}"
                )
        return dimension

    def add(self, chunks: Iterable[DocumentChunk]) -> int:
        """Append a batch atomically. Raises ValueError (adding nothing) on a dimension mismatch."""
        batch = list(chunks)
        if not batch:
            return 0
        with self._lock:
            self._dimension = self._check_batch(batch)
            self._chunks.extend(batch)
        return len(batch)

    def replace(self, source_ids: Iterable[str], chunks: Iterable[DocumentChunk]) -> int:
        """Drop every chunk of `source_ids` and append `chunks`, as one atomic write."""
        drop = set(source_ids)
        batch = list(chunks)
        with self._lock:
            kept = [c for c in self._chunks if c.source_id not in drop]
            dimension = self._dimension if kept else None
            saved, self._dimension = self._dimension, dimension
            try:
                self._dimension = self._check_batch(batch)
            except ValueError:
                self._dimension = saved
                raise
            self._chunks = kept + batch
        return len(batch)

    def remove(self, source_id: str) -> int:
        with self._lock:
            before = len(self._chunks)
            self._chunks = [c for c in self._chunks if c.source_id != source_id]
            removed = before - len(self._chunks)
            if not self._chunks:
                self._dimension = None
        if removed:
            logger.info(f"Removed {removed} chunks for source {source_id!r}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._chunks = []
            self._dimension = None

    def query(self, embedding: Sequence[float], k: int = 3) -> List[ScoredChunk]:
        """Top-k chunks by dot product, highest first; ties keep insertion order."""
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")

        with self._lock:
            snapshot = list(self._chunks)
            dimension = self._dimension

        if not snapshot or k == 0:
            return []

        query_vec = np.asarray(embedding, dtype=float)
        if query_vec.shape != (dimension,):
            raise ValueError(f"Query embedding has shape {query_vec.shape}, index expects ({dimension},)")

        matrix = np.asarray([c.embedding for c in snapshot], dtype=float)
        scores = matrix @ query_vec

        order = np.argsort(-scores, kind="stable")[:k]
        return [
            ScoredChunk(source_id=snapshot[i].source_id, text=snapshot[i].text, score=float(scores[i]))
            for i in order
        ]
