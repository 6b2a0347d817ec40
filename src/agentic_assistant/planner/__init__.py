"""Planner: turn a request plus recent conversation into an ordered capability plan.

The model is asked for a JSON array of {"agent", "prompt"} steps. Parsing tries a fenced
```json block first, then the raw response, and otherwise falls back to one web-search step,
so the planner always returns a usable Plan.
"""

from agentic_assistant.planner.graph import make_planner_graph
from agentic_assistant.planner.parsing import parse_plan, parse_plan_or_fallback
from agentic_assistant.planner.state import Capability, ConversationTurn, Plan, PlanStep

__all__ = [
    "make_planner_graph",
    "parse_plan",
    "parse_plan_or_fallback",
    "Capability",
    "ConversationTurn",
    "Plan",
    "PlanStep",
]
