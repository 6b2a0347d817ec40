"""Planner nodes."""

from agentic_assistant.planner.nodes.planner import make_planner_node

__all__ = ["make_planner_node"]
