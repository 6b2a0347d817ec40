# tests/unit/planner/conftest.py
"""Shared fixtures for planner module unit tests."""

import json

import pytest

from agentic_assistant.planner.state import ConversationTurn


@pytest.fixture
def sample_request():
    return "Find the termination clause in the contract and summarize it"


@pytest.fixture
def sample_plan_steps():
    return [
        {"agent": "KnowledgeAgent", "prompt": "What does the contract say about termination?"},
        {"agent": "SummarizationAgent", "prompt": "{{step_1_output}}"},
    ]


@pytest.fixture
def fenced_plan_response(sample_plan_steps):
    return "Here is the plan:\n```json\n" + json.dumps(sample_plan_steps, indent=2) + "\n```\nGood luck!"


@pytest.fixture
def raw_plan_response(sample_plan_steps):
    return json.dumps(sample_plan_steps)


@pytest.fixture
def sample_history():
    return [
        ConversationTurn(role="user", text="hello"),
        ConversationTurn(role="assistant", text="Hi, how can I help?", capability="WebSearchAgent"),
        ConversationTurn(role="user", text="I uploaded a contract"),
        ConversationTurn(role="assistant", text="Got it.", capability="KnowledgeAgent"),
        ConversationTurn(role="user", text="Find the termination clause in the contract and summarize it"),
    ]
