# src/agentic_assistant/retrieval/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DocumentChunk:
    source_id: str
    text: str
    embedding: Tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.embedding)


@dataclass(frozen=True)
class ScoredChunk:
    source_id: str
    text: str
    score: float
