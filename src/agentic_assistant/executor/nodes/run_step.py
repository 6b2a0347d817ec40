# src/agentic_assistant/executor/nodes/run_step.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.progress import NullProgressSink, ProgressSink
from agentic_assistant.executor.state import (
    CancelCheck,
    ExecutorState,
    StepCompleted,
    StepProgress,
    StepStatus,
    step_key,
)
from agentic_assistant.executor.template import resolve_prompt
from agentic_assistant.utils import observe, with_error_handling

logger = logging.getLogger(__name__)


def make_run_step_node(
    dispatcher: CapabilityDispatcher,
    *,
    progress: Optional[ProgressSink] = None,
    is_cancelled: Optional[CancelCheck] = None,
):
    sink = progress or NullProgressSink()

    @observe
    @with_error_handling("run_step")
    def run_step(state: ExecutorState) -> Dict[str, Any]:
        if is_cancelled is not None and is_cancelled():
            logger.info("Cancellation requested, not dispatching further steps")
            return {"cancelled": True, "continue_execution": False}

        plan = state["plan"]
        idx = int(state.get("current_step_index", 0))
        position, total = idx + 1, len(plan)
        step = plan[idx]

        outputs: Dict[str, str] = dict(state.get("step_outputs") or {})
        resolved = resolve_prompt(step.prompt_template, outputs, current_position=position)

        sink.on_step_started(StepProgress(current=position, total=total, task=resolved, capability=step.capability))

        result = dispatcher.dispatch(step.capability, resolved)
        outputs[step_key(position)] = result.text

        status: List[StepStatus] = list(state.get("step_status") or ["pending"] * total)
        status[idx] = "failed" if result.failed else "completed"

        sink.on_step_completed(
            StepCompleted(current=position, total=total, result=result, is_final=position == total)
        )
        logger.info(f"Step {position}/{total} [{step.capability}] {status[idx]}")

        return {
            "step_outputs": outputs,
            "step_status": status,
            "step_results": list(state.get("step_results") or []) + [result],
            "resolved_prompts": list(state.get("resolved_prompts") or []) + [resolved],
        }

    return run_step
