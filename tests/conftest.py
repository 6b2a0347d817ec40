# tests/conftest.py
"""Root test configuration and collaborators shared by every test area."""

import os
import re
from typing import List, Sequence
from unittest.mock import MagicMock

# Disable Langfuse before the package is imported anywhere
os.environ["LANGFUSE_ENABLED"] = "0"

import numpy as np
import pytest

from agentic_assistant.errors import EmbeddingError

DEFAULT_VOCAB = ("sky", "blue", "grass", "green", "code", "python")


class KeywordEmbedder:
    """Bag-of-keywords embedder: one dimension per vocabulary word plus a small bias, unit-normalised.

    Texts containing any `fail_on` marker raise EmbeddingError.
    """

    def __init__(self, vocab: Sequence[str] = DEFAULT_VOCAB, fail_on: Sequence[str] = ()):
        self.vocab = list(vocab)
        self.fail_on = list(fail_on)
        self.calls: List[str] = []

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise EmbeddingError(f"cannot embed {text!r}")
        words = re.findall(r"[a-z]+", text.lower())
        vec = np.array([float(words.count(w)) for w in self.vocab] + [0.1])
        return (vec / np.linalg.norm(vec)).tolist()


@pytest.fixture
def make_embedder():
    """Factory for KeywordEmbedder with custom vocab / failure markers."""
    return KeywordEmbedder


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedder()


@pytest.fixture
def mock_llm():
    """Mock LanguageModelAdapter; set `generate.return_value` or `generate.side_effect` per test."""
    llm = MagicMock()
    llm.generate = MagicMock(return_value="generated text")
    return llm
