# src/agentic_assistant/executor/capabilities.py
"""Capability handlers.

Every handler has the same contract: `handler(prompt, ctx) -> StepResult`. Soft failures
come back as a StepResult with `failed=True`; collaborator errors (GenerationError) propagate.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from langchain_core.prompts import PromptTemplate

from agentic_assistant.adapters import ImagePayload, LanguageModelAdapter
from agentic_assistant.executor.prompts.capabilities import (
    CODE_GENERATION_PROMPT,
    CONTEXT_BLOCK,
    CONTEXT_SEPARATOR,
    KNOWLEDGE_PROMPT,
    NO_IMAGE_ATTACHED,
    NO_RELEVANT_INFORMATION,
    NOTHING_TO_SUMMARIZE,
    SUMMARIZATION_PROMPT,
    WEB_SEARCH_PROMPT,
)
from agentic_assistant.executor.state import SourceRef, StepResult
from agentic_assistant.planner.state import Capability
from agentic_assistant.retrieval.engine import DEFAULT_TOP_K, RetrievalEngine
from agentic_assistant.retrieval.state import ScoredChunk

logger = logging.getLogger(__name__)


class ImageSlot:
    """Holds at most one attached image until an image-analysis step consumes it."""

    def __init__(self, image: Optional[ImagePayload] = None):
        self._image = image
        self._lock = threading.Lock()

    def attach(self, image: ImagePayload) -> None:
        with self._lock:
            self._image = image

    def peek(self) -> Optional[ImagePayload]:
        with self._lock:
            return self._image

    def take(self) -> Optional[ImagePayload]:
        with self._lock:
            image, self._image = self._image, None
            return image

    def clear(self) -> None:
        self.take()


@dataclass
class CapabilityContext:
    """Collaborators shared by all handlers of one session."""

    llm: LanguageModelAdapter
    retrieval: RetrievalEngine
    images: ImageSlot = field(default_factory=ImageSlot)
    top_k: int = DEFAULT_TOP_K


Handler = Callable[[str, CapabilityContext], StepResult]


def build_context_block(chunks: List[ScoredChunk]) -> str:
    return CONTEXT_SEPARATOR.join(CONTEXT_BLOCK.format(source_id=c.source_id, text=c.text) for c in chunks)


def handle_knowledge(prompt: str, ctx: CapabilityContext) -> StepResult:
    capability = Capability.KNOWLEDGE.value
    chunks = ctx.retrieval.query(prompt, k=ctx.top_k)
    if not chunks:
        return StepResult(capability=capability, text=NO_RELEVANT_INFORMATION)

    text = ctx.llm.generate(
        PromptTemplate.from_template(KNOWLEDGE_PROMPT).format(context=build_context_block(chunks), question=prompt)
    )
    sources = tuple(SourceRef(source_id=c.source_id, text=c.text) for c in chunks)
    return StepResult(capability=capability, text=text, sources=sources)


def handle_web_search(prompt: str, ctx: CapabilityContext) -> StepResult:
    text = ctx.llm.generate(PromptTemplate.from_template(WEB_SEARCH_PROMPT).format(query=prompt))
    return StepResult(capability=Capability.WEB_SEARCH.value, text=text)


def handle_code_generation(prompt: str, ctx: CapabilityContext) -> StepResult:
    text = ctx.llm.generate(PromptTemplate.from_template(CODE_GENERATION_PROMPT).format(request=prompt))
    return StepResult(capability=Capability.CODE_GENERATION.value, text=text)


def resolve_summary_target(prompt: str, retrieval: RetrievalEngine) -> str:
    """Full text of the document named by `prompt`, else the prompt itself."""
    document = retrieval.document_text(prompt)
    if document is not None:
        return document
    return prompt


def handle_summarization(prompt: str, ctx: CapabilityContext) -> StepResult:
    capability = Capability.SUMMARIZATION.value
    target = resolve_summary_target(prompt, ctx.retrieval)
    if not target.strip():
        return StepResult(capability=capability, text=NOTHING_TO_SUMMARIZE.format(prompt=prompt), failed=True)

    text = ctx.llm.generate(PromptTemplate.from_template(SUMMARIZATION_PROMPT).format(text=target))
    return StepResult(capability=capability, text=text)


def handle_image_analysis(prompt: str, ctx: CapabilityContext) -> StepResult:
    capability = Capability.IMAGE_ANALYSIS.value
    image = ctx.images.peek()
    if image is None:
        return StepResult(capability=capability, text=NO_IMAGE_ATTACHED, failed=True)

    text = ctx.llm.generate(prompt, image=image)
    # One-shot: the image belongs to the request it was attached to.
    ctx.images.clear()
    return StepResult(capability=capability, text=text)


DEFAULT_HANDLERS: Dict[Capability, Handler] = {
    Capability.KNOWLEDGE: handle_knowledge,
    Capability.WEB_SEARCH: handle_web_search,
    Capability.CODE_GENERATION: handle_code_generation,
    Capability.SUMMARIZATION: handle_summarization,
    Capability.IMAGE_ANALYSIS: handle_image_analysis,
}
