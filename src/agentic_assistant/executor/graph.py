# src/agentic_assistant/executor/graph.py

from __future__ import annotations

from typing import Optional

from langgraph.graph import END, START, StateGraph

from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.nodes.executor_gate import executor_gate
from agentic_assistant.executor.nodes.finalize_run import finalize_run
from agentic_assistant.executor.nodes.run_step import make_run_step_node
from agentic_assistant.executor.nodes.should_continue import should_continue
from agentic_assistant.executor.progress import ProgressSink
from agentic_assistant.executor.state import CancelCheck, ExecutorState


def make_executor_graph(
    dispatcher: CapabilityDispatcher,
    *,
    progress: Optional[ProgressSink] = None,
    is_cancelled: Optional[CancelCheck] = None,
):
    # Steps run strictly one after another; no RetryPolicy, collaborator failures abort the run.
    g = StateGraph(ExecutorState)

    g.add_node("executor_gate", executor_gate)
    g.add_node("run_step", make_run_step_node(dispatcher, progress=progress, is_cancelled=is_cancelled))
    g.add_node("should_continue", should_continue)
    g.add_node("finalize_run", finalize_run)

    g.add_edge(START, "executor_gate")

    # If executor_gate rejects the plan, go straight to finalize
    def route_after_gate(state: ExecutorState):
        return "run_step" if state.get("continue_execution", False) else "finalize_run"

    g.add_conditional_edges("executor_gate", route_after_gate, ["run_step", "finalize_run"])

    g.add_edge("run_step", "should_continue")

    def route_loop(state: ExecutorState):
        return "run_step" if state.get("continue_execution", False) else "finalize_run"

    g.add_conditional_edges("should_continue", route_loop, ["run_step", "finalize_run"])

    g.add_edge("finalize_run", END)

    return g.compile()
