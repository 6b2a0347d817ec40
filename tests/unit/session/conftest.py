# tests/unit/session/conftest.py
"""Shared fixtures for session and master-graph tests."""

import json

import pytest

from agentic_assistant.config import AssistantSettings
from agentic_assistant.executor.progress import CollectingProgressSink
from agentic_assistant.session import AssistantSession


class ScriptedLLM:
    """Language model fake: planner prompts get `plan`, everything else gets the next answer.

    Entries in `answers` that are exceptions are raised instead of returned.
    """

    def __init__(self, plan=None, answers=()):
        self.plan = plan
        self.answers = list(answers)
        self.prompts = []
        self.images = []

    def generate(self, prompt, image=None):
        self.prompts.append(prompt)
        self.images.append(image)
        if "You are an expert planning agent" in prompt:
            if isinstance(self.plan, Exception):
                raise self.plan
            return self.plan if isinstance(self.plan, str) else "```json\n" + json.dumps(self.plan) + "\n```"
        answer = self.answers.pop(0) if self.answers else f"answer {len(self.prompts)}"
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def settings():
    return AssistantSettings(chunk_size=20, chunk_overlap=5, embed_workers=2)


@pytest.fixture
def progress():
    return CollectingProgressSink()


@pytest.fixture
def make_session(keyword_embedder, settings, progress):
    def _make(llm):
        return AssistantSession(llm, keyword_embedder, settings=settings, progress=progress)

    return _make


@pytest.fixture
def scripted_llm():
    """Factory for ScriptedLLM."""
    return ScriptedLLM
