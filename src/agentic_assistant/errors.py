# src/agentic_assistant/errors.py
"""Exception types shared across the assistant."""


class AssistantError(Exception):
    """Base class for all assistant errors."""


class GenerationError(AssistantError):
    """The language-model collaborator failed to produce text."""


class EmbeddingError(AssistantError):
    """The embedding collaborator failed to produce a vector."""


class ChunkingConfigError(AssistantError, ValueError):
    """Chunk size/overlap combination is invalid."""
