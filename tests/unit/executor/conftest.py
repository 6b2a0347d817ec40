# tests/unit/executor/conftest.py
"""Shared fixtures for executor module unit tests."""

from typing import Dict, List, Tuple

import pytest

from agentic_assistant.adapters import ImagePayload
from agentic_assistant.executor.capabilities import CapabilityContext, ImageSlot
from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.progress import CollectingProgressSink
from agentic_assistant.executor.state import StepResult
from agentic_assistant.planner.state import Capability, Plan, PlanStep
from agentic_assistant.retrieval.engine import RetrievalEngine


class RecordingHandlers:
    """Handlers that record (capability, prompt) and answer from a script.

    `replies` maps a capability to the texts returned on successive calls; when exhausted
    the handler answers "<capability>:<prompt>".
    """

    def __init__(self, replies: Dict[Capability, List[str]] = None):
        self.calls: List[Tuple[str, str]] = []
        self.replies = {k: list(v) for k, v in (replies or {}).items()}

    def _make(self, capability: Capability):
        def handler(prompt: str, ctx: CapabilityContext) -> StepResult:
            self.calls.append((capability.value, prompt))
            queue = self.replies.get(capability) or []
            text = queue.pop(0) if queue else f"{capability.value}:{prompt}"
            return StepResult(capability=capability.value, text=text)

        return handler

    def table(self):
        return {c: self._make(c) for c in Capability}


@pytest.fixture
def retrieval(keyword_embedder):
    return RetrievalEngine(keyword_embedder, chunk_size=20, chunk_overlap=5)


@pytest.fixture
def capability_context(mock_llm, retrieval):
    return CapabilityContext(llm=mock_llm, retrieval=retrieval, images=ImageSlot())


@pytest.fixture
def dispatcher(capability_context):
    return CapabilityDispatcher(capability_context)


@pytest.fixture
def recording_handlers():
    return RecordingHandlers()


@pytest.fixture
def recording_dispatcher(capability_context, recording_handlers):
    return CapabilityDispatcher(capability_context, handlers=recording_handlers.table())


@pytest.fixture
def progress():
    return CollectingProgressSink()


@pytest.fixture
def sample_image():
    return ImagePayload(mime_type="image/png", base64_data="iVBORw0KGgo=", name="chart.png")


@pytest.fixture
def make_plan():
    def _make(*steps):
        return Plan.of([PlanStep(capability=c, prompt_template=p) for c, p in steps])

    return _make


@pytest.fixture
def two_step_plan(make_plan):
    return make_plan(("WebSearchAgent", "x"), ("CodeGenerationAgent", "use {{step_1_output}}"))
