"""Prompt templates for the planner."""

from agentic_assistant.planner.prompts.planner import PLANNER_PROMPT

__all__ = ["PLANNER_PROMPT"]
