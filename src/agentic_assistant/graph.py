# src/agentic_assistant/graph.py
from __future__ import annotations

from typing import Optional

from langgraph.graph import END, START, StateGraph

from agentic_assistant.adapters import LanguageModelAdapter
from agentic_assistant.executor.dispatcher import CapabilityDispatcher
from agentic_assistant.executor.graph import make_executor_graph
from agentic_assistant.executor.progress import ProgressSink
from agentic_assistant.executor.state import CancelCheck
from agentic_assistant.planner.graph import make_planner_graph
from agentic_assistant.planner.nodes.planner import DEFAULT_HISTORY_WINDOW
from agentic_assistant.state import AssistantState


def make_assistant_graph(
    llm: LanguageModelAdapter,
    dispatcher: CapabilityDispatcher,
    *,
    progress: Optional[ProgressSink] = None,
    is_cancelled: Optional[CancelCheck] = None,
    history_window: int = DEFAULT_HISTORY_WINDOW,
):
    """Create the master graph: planner, then executor."""
    # 1. compile subgraphs
    planner = make_planner_graph(llm, history_window=history_window)
    executor = make_executor_graph(dispatcher, progress=progress, is_cancelled=is_cancelled)

    # 2. construct master graph
    workflow = StateGraph(AssistantState)

    workflow.add_node("planner", planner)
    workflow.add_node("executor", executor)

    # 3. define edges
    # The planner always yields a plan, so there is nothing to route on.
    workflow.add_edge(START, "planner")
    workflow.add_edge("planner", "executor")
    workflow.add_edge("executor", END)

    return workflow.compile()
