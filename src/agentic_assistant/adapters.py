# src/agentic_assistant/adapters.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

import numpy as np
from langchain_core.messages import HumanMessage

from agentic_assistant.errors import EmbeddingError, GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImagePayload:
    """An image attached to a request, already base64-encoded."""

    mime_type: str
    base64_data: str
    name: Optional[str] = None

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


class LanguageModelAdapter(Protocol):
    """Adapter for the hosted language model.

    Example implementation over a raw HTTP API:

        class GeminiGenerator:
            def __init__(self, session, url):
                self.session = session
                self.url = url

            def generate(self, prompt, image=None):
                parts = [{"text": prompt}]
                if image is not None:
                    parts.append({"inline_data": {"mime_type": image.mime_type, "data": image.base64_data}})
                resp = self.session.post(self.url, json={"contents": [{"parts": parts}]})
                if not resp.ok:
                    raise GenerationError(f"API Error: {resp.status_code}")
                return resp.json()["candidates"][0]["content"]["parts"][0]["text"]
    """

    def generate(self, prompt: str, image: Optional[ImagePayload] = None) -> str:
        """Return generated text or raise GenerationError."""
        raise NotImplementedError


class EmbeddingAdapter(Protocol):
    """Adapter for the embedding model. Vectors are expected to be unit-normalised."""

    def embed(self, text: str) -> List[float]:
        """Return a fixed-length vector or raise EmbeddingError."""
        raise NotImplementedError


# -------------------------
# LangChain-backed defaults
# -------------------------


def _content_to_text(content: Any) -> str:
    # Chat models return either a plain string or a list of content blocks.
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text") or "")
        return "".join(parts)
    return ""


class ChatModelGenerator:
    """LanguageModelAdapter over any LangChain chat model (see `model.get_default_model`)."""

    def __init__(self, llm):
        self.llm = llm

    def generate(self, prompt: str, image: Optional[ImagePayload] = None) -> str:
        content: List[dict] = [{"type": "text", "text": prompt}]
        if image is not None:
            content.append({"type": "image_url", "image_url": {"url": image.data_url}})

        try:
            response = self.llm.invoke([HumanMessage(content=content)])
        except Exception as e:
            raise GenerationError(f"Generation failed: {e}") from e

        text = _content_to_text(getattr(response, "content", response))
        if not text:
            raise GenerationError("Generation failed: empty response")
        return text


class LangChainEmbedder:
    """EmbeddingAdapter over a LangChain `Embeddings` (see `model.get_default_embeddings`)."""

    def __init__(self, embeddings, *, normalize: bool = True):
        self.embeddings = embeddings
        self.normalize = normalize

    def embed(self, text: str) -> List[float]:
        try:
            raw = self.embeddings.embed_query(text)
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e

        vector = np.asarray(raw, dtype=float)
        if vector.ndim != 1 or vector.size == 0:
            raise EmbeddingError(f"Embedding failed: unexpected shape {vector.shape}")

        if self.normalize:
            norm = np.linalg.norm(vector)
            if norm == 0.0:
                raise EmbeddingError("Embedding failed: zero vector")
            vector = vector / norm
        return vector.tolist()
