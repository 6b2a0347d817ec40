"""Executor nodes for the plan step loop."""

from agentic_assistant.executor.nodes.executor_gate import executor_gate
from agentic_assistant.executor.nodes.finalize_run import finalize_run
from agentic_assistant.executor.nodes.run_step import make_run_step_node
from agentic_assistant.executor.nodes.should_continue import should_continue

__all__ = [
    "executor_gate",
    "make_run_step_node",
    "should_continue",
    "finalize_run",
]
