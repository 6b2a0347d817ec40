# src/agentic_assistant/session.py
"""Orchestration session: the one place that owns mutable assistant state.

The transcript, the retrieval engine (index plus full document texts), the attached image
and the cancellation flag all live on an `AssistantSession`; planner and executor only see
what the session passes into the graph.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from agentic_assistant.adapters import (
    ChatModelGenerator,
    EmbeddingAdapter,
    ImagePayload,
    LangChainEmbedder,
    LanguageModelAdapter,
)
from agentic_assistant.config import AssistantSettings
from agentic_assistant.executor.capabilities import CapabilityContext, ImageSlot
from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.progress import LoggingProgressSink, ProgressSink
from agentic_assistant.executor.state import StepResult, StepStatus
from agentic_assistant.graph import make_assistant_graph
from agentic_assistant.planner.state import ConversationTurn, Plan, PlanSource
from agentic_assistant.retrieval.engine import RetrievalEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssistantReply:
    plan: Plan
    plan_source: PlanSource
    step_results: Tuple[StepResult, ...]
    step_status: Tuple[StepStatus, ...]
    final_result: Optional[StepResult]
    errors: Tuple[Dict[str, Any], ...] = ()
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors and not self.cancelled

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan.to_wire(),
            "plan_source": self.plan_source,
            "step_results": [r.to_dict() for r in self.step_results],
            "step_status": list(self.step_status),
            "final_result": self.final_result.to_dict() if self.final_result else None,
            "errors": list(self.errors),
            "cancelled": self.cancelled,
        }


@dataclass
class _Transcript:
    turns: List[ConversationTurn] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def append(self, turn: ConversationTurn) -> None:
        with self.lock:
            self.turns.append(turn)

    def snapshot(self) -> Tuple[ConversationTurn, ...]:
        with self.lock:
            return tuple(self.turns)


class AssistantSession:
    def __init__(
        self,
        llm: LanguageModelAdapter,
        embedder: EmbeddingAdapter,
        *,
        settings: Optional[AssistantSettings] = None,
        progress: Optional[ProgressSink] = None,
    ):
        self.settings = settings or AssistantSettings()
        self.llm = llm
        self.retrieval = RetrievalEngine(
            embedder,
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
            max_workers=self.settings.embed_workers,
        )
        self.images = ImageSlot()
        self.progress = progress or LoggingProgressSink()

        self._transcript = _Transcript()
        self._cancel = threading.Event()

        self.dispatcher = CapabilityDispatcher(
            CapabilityContext(llm=llm, retrieval=self.retrieval, images=self.images, top_k=self.settings.top_k)
        )
        self.graph = make_assistant_graph(
            llm,
            self.dispatcher,
            progress=self.progress,
            is_cancelled=self._cancel.is_set,
            history_window=self.settings.history_window,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[AssistantSettings] = None, *, progress: Optional[ProgressSink] = None
    ) -> "AssistantSession":
        """Session over the default LangChain chat and embedding models."""
        from agentic_assistant.model import get_default_embeddings, get_default_model

        settings = settings or AssistantSettings.from_env()
        return cls(
            ChatModelGenerator(get_default_model(settings)),
            LangChainEmbedder(get_default_embeddings(settings)),
            settings=settings,
            progress=progress,
        )

    # -------------------------
    # Conversation
    # -------------------------

    @property
    def history(self) -> Tuple[ConversationTurn, ...]:
        return self._transcript.snapshot()

    # -------------------------
    # Documents and images
    # -------------------------

    def add_document(self, source_id: str, text: str) -> int:
        return self.retrieval.ingest(source_id, text)

    def add_documents(self, documents: Mapping[str, str]) -> Dict[str, int]:
        return self.retrieval.ingest_many(documents)

    def remove_document(self, source_id: str) -> int:
        image = self.images.peek()
        if image is not None and image.name == source_id:
            self.images.clear()
        return self.retrieval.remove(source_id)

    @property
    def documents(self) -> List[str]:
        return self.retrieval.source_ids()

    def attach_image(self, image: ImagePayload) -> None:
        self.images.attach(image)

    def clear_image(self) -> None:
        self.images.clear()

    # -------------------------
    # Runs
    # -------------------------

    def cancel(self) -> None:
        """Stop dispatching further steps of the in-flight run."""
        self._cancel.set()

    def ask(self, request: str) -> AssistantReply:
        if not request or not request.strip():
            raise ValueError("request must not be blank")

        self._cancel.clear()
        history = list(self.history)
        self._transcript.append(ConversationTurn(role="user", text=request))

        out = self.graph.invoke(
            {"request": request, "history": history},
            config={"recursion_limit": self.settings.recursion_limit},
        )

        results: List[StepResult] = list(out.get("step_results") or [])
        for result in results:
            self._transcript.append(ConversationTurn(role="assistant", text=result.text, capability=result.capability))

        errors = tuple(out.get("errors") or [])
        if errors:
            logger.warning(f"Run ended with {len(errors)} error(s): {errors[0].get('message')}")

        return AssistantReply(
            plan=out["plan"],
            plan_source=out.get("plan_source", "fallback"),
            step_results=tuple(results),
            step_status=tuple(out.get("step_status") or []),
            final_result=out.get("final_result"),
            errors=errors,
            cancelled=bool(out.get("cancelled")),
        )
