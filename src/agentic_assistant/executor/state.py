# src/agentic_assistant/executor/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Tuple, TypedDict

from agentic_assistant.planner.state import Plan

StepStatus = Literal["pending", "running", "completed", "failed"]


def add_errors(existing: Optional[List[Dict[str, Any]]], new: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    if not existing:
        existing = []
    if not new:
        return existing
    return existing + new


def step_key(position: int) -> str:
    """Output key for a 1-based step position."""
    return f"step_{position}_output"


# -------------------------
# Step results
# -------------------------


@dataclass(frozen=True)
class SourceRef:
    source_id: str
    text: str


@dataclass(frozen=True)
class StepResult:
    """What one capability produced for one step.

    `failed` marks soft failures (unknown capability, missing image, ...): the text explains
    the problem and the plan keeps going.
    """

    capability: str
    text: str
    sources: Optional[Tuple[SourceRef, ...]] = None
    failed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capability": self.capability,
            "text": self.text,
            "sources": [{"source_id": s.source_id, "text": s.text} for s in self.sources]
            if self.sources is not None
            else None,
            "failed": self.failed,
        }


# -------------------------
# Progress events
# -------------------------


@dataclass(frozen=True)
class StepProgress:
    """Emitted right before a step is dispatched."""

    current: int
    total: int
    task: str
    capability: str


@dataclass(frozen=True)
class StepCompleted:
    """Emitted once a step has its result; replaces the matching StepProgress."""

    current: int
    total: int
    result: StepResult
    is_final: bool


# -------------------------
# Executor state (graph)
# -------------------------


class ExecutorState(TypedDict, total=False):
    # Inputs
    plan: Plan

    # Step loop
    current_step_index: int  # 0-based
    step_outputs: Dict[str, str]  # "step_<N>_output" -> text, completed steps only
    step_status: List[StepStatus]
    step_results: List[StepResult]
    resolved_prompts: List[str]

    # Outputs
    final_result: Optional[StepResult]

    # Control flow
    continue_execution: bool
    aborted: bool
    cancelled: bool

    # Errors
    errors: Annotated[List[Dict[str, Any]], add_errors]


CancelCheck = Callable[[], bool]
