# src/agentic_assistant/executor/progress.py

from __future__ import annotations

import logging
from typing import List, Protocol, Union

from agentic_assistant.executor.state import StepCompleted, StepProgress

logger = logging.getLogger(__name__)

ProgressEvent = Union[StepProgress, StepCompleted]


class ProgressSink(Protocol):
    """Receives step events for display. Purely observational."""

    def on_step_started(self, event: StepProgress) -> None:
        raise NotImplementedError

    def on_step_completed(self, event: StepCompleted) -> None:
        raise NotImplementedError


class NullProgressSink:
    def on_step_started(self, event: StepProgress) -> None:
        pass

    def on_step_completed(self, event: StepCompleted) -> None:
        pass


class LoggingProgressSink:
    def on_step_started(self, event: StepProgress) -> None:
        logger.info(f"Step {event.current}/{event.total} [{event.capability}]: {event.task[:80]}")

    def on_step_completed(self, event: StepCompleted) -> None:
        status = "failed" if event.result.failed else "done"
        logger.info(f"Step {event.current}/{event.total} [{event.result.capability}] {status}")


class CollectingProgressSink:
    """Keeps every event in order; `transcript` mirrors what a chat UI would show."""

    def __init__(self):
        self.events: List[ProgressEvent] = []

    def on_step_started(self, event: StepProgress) -> None:
        self.events.append(event)

    def on_step_completed(self, event: StepCompleted) -> None:
        self.events.append(event)

    @property
    def transcript(self) -> List[ProgressEvent]:
        # A completed step replaces its "thinking" entry.
        shown: List[ProgressEvent] = []
        for event in self.events:
            if isinstance(event, StepCompleted) and shown and isinstance(shown[-1], StepProgress):
                shown[-1] = event
            else:
                shown.append(event)
        return shown

    def clear(self) -> None:
        self.events = []
