from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from agentic_assistant.adapters import LanguageModelAdapter
from agentic_assistant.planner.nodes.planner import DEFAULT_HISTORY_WINDOW, make_planner_node
from agentic_assistant.planner.state import PlannerGraphState


def make_planner_graph(llm: LanguageModelAdapter, *, history_window: int = DEFAULT_HISTORY_WINDOW):
    # No RetryPolicy: the planner absorbs failures into its fallback plan.
    g = StateGraph(PlannerGraphState)
    g.add_node("planner", make_planner_node(llm, history_window=history_window))
    g.add_edge(START, "planner")
    g.add_edge("planner", END)
    return g.compile()
