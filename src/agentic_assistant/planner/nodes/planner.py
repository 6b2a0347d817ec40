from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from langchain_core.prompts import PromptTemplate

from agentic_assistant.adapters import LanguageModelAdapter
from agentic_assistant.planner.parsing import parse_plan_or_fallback
from agentic_assistant.planner.prompts.planner import PLANNER_PROMPT
from agentic_assistant.planner.state import (
    CAPABILITY_DESCRIPTIONS,
    ConversationTurn,
    Plan,
    PlannerGraphState,
)
from agentic_assistant.utils import observe

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 4


def render_capabilities() -> str:
    return "\n".join(f"- {cap.value}: {desc}" for cap, desc in CAPABILITY_DESCRIPTIONS.items())


def render_history(history: Sequence[ConversationTurn]) -> str:
    return "\n".join(f"{turn.role}: {turn.text}" for turn in history)


def recent_history(history: Sequence[ConversationTurn], window: int) -> list:
    if window <= 0:
        return []
    return list(history)[-window:]


def make_planner_node(llm: LanguageModelAdapter, *, history_window: int = DEFAULT_HISTORY_WINDOW):
    """Planner node:
    - Reads `request` and `history` (only the last `history_window` turns are shown to the model)
    - Emits `plan` (always a valid, non-empty Plan) and `plan_source`
    - Model failures and unparseable output end in the single-step web-search fallback
    """
    prompt = PromptTemplate.from_template(PLANNER_PROMPT)

    @observe
    def planner(state: PlannerGraphState) -> Dict[str, Any]:
        request = state.get("request") or ""
        history = recent_history(state.get("history") or [], history_window)

        text = prompt.format(
            capabilities=render_capabilities(),
            history=render_history(history),
            request=request,
        )

        try:
            raw = llm.generate(text)
        except Exception as e:
            logger.warning(f"Planner call failed, using fallback plan: {e}")
            return {"plan": Plan.fallback(request), "plan_source": "fallback"}

        plan, source = parse_plan_or_fallback(raw, request)
        logger.info(f"Planned {len(plan)} steps ({source}): {[s.capability for s in plan]}")
        return {"plan": plan, "plan_source": source}

    return planner
