# src/agentic_assistant/executor/dispatcher.py

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from agentic_assistant.executor.capabilities import DEFAULT_HANDLERS, CapabilityContext, Handler
from agentic_assistant.executor.prompts.capabilities import UNKNOWN_CAPABILITY
from agentic_assistant.executor.state import StepResult
from agentic_assistant.planner.state import Capability

logger = logging.getLogger(__name__)


def parse_capability(name: str) -> Optional[Capability]:
    try:
        return Capability(name)
    except ValueError:
        return None


class CapabilityDispatcher:
    """Fixed table from capability to handler.

    Names are checked here, at the boundary: an unknown name yields a failed StepResult
    instead of reaching any handler.
    """

    def __init__(self, context: CapabilityContext, handlers: Optional[Mapping[Capability, Handler]] = None):
        table = dict(DEFAULT_HANDLERS if handlers is None else handlers)
        missing = [c.value for c in Capability if c not in table]
        if missing:
            raise ValueError(f"No handler registered for: {missing}")
        self.context = context
        self.handlers: Mapping[Capability, Handler] = MappingProxyType(table)

    def dispatch(self, capability: str, prompt: str) -> StepResult:
        parsed = parse_capability(capability)
        if parsed is None:
            logger.warning(f"Unknown capability {capability!r}")
            return StepResult(
                capability=str(capability),
                text=UNKNOWN_CAPABILITY.format(capability=capability),
                failed=True,
            )
        return self.handlers[parsed](prompt, self.context)
