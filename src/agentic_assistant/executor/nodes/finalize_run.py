# src/agentic_assistant/executor/nodes/finalize_run.py

from __future__ import annotations

import logging
from typing import Any, Dict, List

from agentic_assistant.executor.state import ExecutorState, StepResult, StepStatus
from agentic_assistant.utils import observe

logger = logging.getLogger(__name__)


@observe
def finalize_run(state: ExecutorState) -> Dict[str, Any]:
    results: List[StepResult] = list(state.get("step_results") or [])
    status: List[StepStatus] = list(state.get("step_status") or [])
    idx = int(state.get("current_step_index", 0))

    # The step that raised never produced a result
    if state.get("aborted") and idx < len(status) and status[idx] == "pending":
        status[idx] = "failed"

    final = results[-1] if results else None

    logger.info(
        f"Run finished: {len(results)}/{len(status)} steps produced results"
        f"{' (aborted)' if state.get('aborted') else ''}{' (cancelled)' if state.get('cancelled') else ''}"
    )

    return {"final_result": final, "step_status": status}
