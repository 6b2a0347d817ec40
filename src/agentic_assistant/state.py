# src/agentic_assistant/state.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from typing_extensions import TypedDict

from agentic_assistant.executor.state import StepResult, StepStatus, add_errors
from agentic_assistant.planner.state import ConversationTurn, Plan, PlanSource


class AssistantState(TypedDict, total=False):
    """Unified state for the master graph.

    A superset of PlannerGraphState and ExecutorState so both subgraphs can run as nodes.
    """

    # --- PLANNER ---
    request: str
    history: List[ConversationTurn]
    plan: Plan
    plan_source: PlanSource

    # --- EXECUTOR ---
    current_step_index: int
    step_outputs: Dict[str, str]
    step_status: List[StepStatus]
    step_results: List[StepResult]
    resolved_prompts: List[str]
    final_result: Optional[StepResult]

    continue_execution: bool
    aborted: bool
    cancelled: bool

    # --- COMMON ---
    # Shared error channel
    errors: Annotated[List[Dict[str, Any]], add_errors]
