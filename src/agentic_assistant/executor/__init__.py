"""Executor subgraph: run plan steps in order, threading outputs through placeholders."""

from agentic_assistant.executor.capabilities import CapabilityContext, ImageSlot
from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.graph import make_executor_graph
from agentic_assistant.executor.progress import (
    CollectingProgressSink,
    LoggingProgressSink,
    NullProgressSink,
    ProgressSink,
)
from agentic_assistant.executor.state import ExecutorState, SourceRef, StepCompleted, StepProgress, StepResult

__all__ = [
    "make_executor_graph",
    "CapabilityContext",
    "CapabilityDispatcher",
    "ImageSlot",
    "ExecutorState",
    "SourceRef",
    "StepResult",
    "StepProgress",
    "StepCompleted",
    "ProgressSink",
    "NullProgressSink",
    "LoggingProgressSink",
    "CollectingProgressSink",
]
