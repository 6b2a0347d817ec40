# src/agentic_assistant/executor/nodes/executor_gate.py

from __future__ import annotations

from typing import Any, Dict

from agentic_assistant.executor.state import ExecutorState
from agentic_assistant.planner.state import Plan
from agentic_assistant.utils import make_error


def executor_gate(state: ExecutorState) -> Dict[str, Any]:
    plan = state.get("plan")

    if not isinstance(plan, Plan) or len(plan) == 0:
        return {
            "errors": [
                make_error(
                    "executor_gate",
                    "schema_validation",
                    "Missing or empty plan.",
                    retryable=False,
                    details={"plan_type": type(plan).__name__},
                )
            ],
            "continue_execution": False,
            "step_results": [],
            "step_status": [],
        }

    return {
        "current_step_index": 0,
        "step_outputs": {},
        "step_status": ["pending"] * len(plan),
        "step_results": [],
        "resolved_prompts": [],
        "final_result": None,
        "continue_execution": True,
        "aborted": False,
        "cancelled": False,
    }
