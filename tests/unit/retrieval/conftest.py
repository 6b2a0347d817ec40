# tests/unit/retrieval/conftest.py
"""Shared fixtures for retrieval module unit tests."""

import pytest

from agentic_assistant.retrieval.engine import RetrievalEngine
from agentic_assistant.retrieval.state import DocumentChunk

SKY_DOCUMENT = "The sky is blue. Grass is green."


@pytest.fixture
def sky_document():
    return SKY_DOCUMENT


@pytest.fixture
def engine(keyword_embedder):
    """Engine with small windows so short documents produce several chunks."""
    return RetrievalEngine(keyword_embedder, chunk_size=20, chunk_overlap=5, max_workers=2)


@pytest.fixture
def make_chunk():
    def _make(source_id, text, *embedding):
        return DocumentChunk(source_id=source_id, text=text, embedding=tuple(float(x) for x in embedding))

    return _make
