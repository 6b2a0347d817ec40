# src/agentic_assistant/retrieval/chunking.py

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterator, Union, overload

from agentic_assistant.errors import ChunkingConfigError

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def validate_chunking(size: int, overlap: int) -> None:
    if size <= 0:
        raise ChunkingConfigError(f"chunk size must be positive, got {size}")
    if overlap < 0:
        raise ChunkingConfigError(f"chunk overlap must not be negative, got {overlap}")
    if overlap >= size:
        raise ChunkingConfigError(f"chunk overlap ({overlap}) must be smaller than chunk size ({size})")


class TextChunks(Sequence):
    """Overlapping fixed-size character windows over a text.

    Chunk i starts at i * (size - overlap) and spans `size` characters; the last chunks
    may be shorter. Slicing happens on access, so iterating again starts from the top.
    """

    def __init__(self, text: str, size: int = DEFAULT_CHUNK_SIZE, overlap: int = DEFAULT_CHUNK_OVERLAP):
        validate_chunking(size, overlap)
        self.text = text
        self.size = size
        self.overlap = overlap

    @property
    def step(self) -> int:
        return self.size - self.overlap

    def __len__(self) -> int:
        # ceil(L / step)
        return -(-len(self.text) // self.step)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list: ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]

        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("chunk index out of range")
        start = index * self.step
        return self.text[start : start + self.size]

    def __iter__(self) -> Iterator[str]:
        for start in range(0, len(self.text), self.step):
            yield self.text[start : start + self.size]

    def __repr__(self) -> str:
        return f"TextChunks(len={len(self)}, size={self.size}, overlap={self.overlap})"


def chunk_text(text: str, size: int = DEFAULT_CHUNK_SIZE, overlap: int = DEFAULT_CHUNK_OVERLAP) -> TextChunks:
    """Split `text` into overlapping windows. Empty text yields no chunks."""
    return TextChunks(text or "", size=size, overlap=overlap)
