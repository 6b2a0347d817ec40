"""In-memory document retrieval: chunking, embedding on ingest, dot-product ranking on query."""

from agentic_assistant.retrieval.chunking import TextChunks, chunk_text
from agentic_assistant.retrieval.engine import RetrievalEngine
from agentic_assistant.retrieval.index import VectorIndex
from agentic_assistant.retrieval.state import DocumentChunk, ScoredChunk

__all__ = [
    "TextChunks",
    "chunk_text",
    "RetrievalEngine",
    "VectorIndex",
    "DocumentChunk",
    "ScoredChunk",
]
