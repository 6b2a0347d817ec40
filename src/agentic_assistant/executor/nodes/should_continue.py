# src/agentic_assistant/executor/nodes/should_continue.py

from __future__ import annotations

from typing import Any, Dict

from agentic_assistant.executor.state import ExecutorState


def should_continue(state: ExecutorState) -> Dict[str, Any]:
    plan = state.get("plan")
    total = len(plan) if plan is not None else 0
    idx = int(state.get("current_step_index", 0))

    # Stop on abort (collaborator failure), cancellation, or end of plan
    stopped = bool(state.get("aborted")) or bool(state.get("cancelled"))
    reached_end = (idx + 1) >= total

    cont = not (stopped or reached_end)

    return {
        "continue_execution": cont,
        "current_step_index": (idx + 1) if cont else idx,
    }
