# src/agentic_assistant/planner/parsing.py
"""Two-stage parsing of the planner's language-model response.

Stage 1 looks for a ```json fenced block and parses its body. Stage 2 parses the whole
response. If neither yields a valid plan, the caller falls back to a single web-search step.
Nothing in here raises on bad model output.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from agentic_assistant.planner.state import Plan, PlanSource

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)


def extract_fenced_json(text: str) -> Optional[str]:
    """Body of the first ```json fenced block, or None."""
    match = _FENCED_JSON.search(text or "")
    return match.group(1) if match else None


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None


def plan_from_json(data: Any) -> Optional[Plan]:
    """Validate decoded JSON as a plan: a non-empty array of {agent, prompt} objects."""
    if not isinstance(data, list) or not data:
        return None
    if not all(isinstance(item, dict) and "agent" in item and "prompt" in item for item in data):
        return None
    # Agent names are coerced to text so a bad name fails its own step at dispatch, not the plan.
    steps = [{**item, "agent": str(item["agent"])} for item in data]
    try:
        return Plan.model_validate({"steps": steps})
    except ValidationError as e:
        logger.debug(f"Plan JSON failed validation: {e.error_count()} errors")
        return None


def parse_plan(text: str) -> Tuple[Optional[Plan], Optional[PlanSource]]:
    """Parse a model response into a plan.

    Returns (plan, "fenced" | "raw") on success and (None, None) when both stages fail.
    """
    fenced = extract_fenced_json(text)
    if fenced is not None:
        plan = plan_from_json(_loads(fenced))
        if plan is not None:
            return plan, "fenced"
        logger.debug("Fenced json block did not contain a valid plan, trying raw response")

    plan = plan_from_json(_loads((text or "").strip()))
    if plan is not None:
        return plan, "raw"

    return None, None


def parse_plan_or_fallback(text: str, request: str) -> Tuple[Plan, PlanSource]:
    """Like `parse_plan`, but always returns a plan."""
    plan, source = parse_plan(text)
    if plan is None:
        logger.warning("Failed to parse plan from model response, falling back to web search")
        return Plan.fallback(request), "fallback"
    return plan, source
