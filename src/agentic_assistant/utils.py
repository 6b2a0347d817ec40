# src/agentic_assistant/utils.py
"""Utilities for graph nodes: error handling, observability, logging."""

import functools
import logging
import os
from typing import Any, Callable, Dict

from agentic_assistant.errors import AssistantError

OBSERVE_ENABLED = os.getenv("LANGFUSE_ENABLED", "1") == "1"

if OBSERVE_ENABLED:
    from langfuse import observe
else:

    def observe(fn=None, **kwargs):
        def _wrap(f):
            return f

        return _wrap(fn) if fn else _wrap


def make_error(node: str, type_: str, message: str, *, retryable: bool, details: Any = None) -> Dict[str, Any]:
    """Structured error entry for the shared `errors` channel."""
    return {
        "node": node,
        "type": type_,
        "message": message,
        "retryable": retryable,
        "details": details,
    }


def with_error_handling(node_name: str) -> Callable:
    """Decorator to stop a plan run cleanly when a node raises.

    Collaborator failures (and anything unexpected) are logged and turned into a single
    structured error. The run is marked aborted so no further steps are dispatched.

    Example:
        @with_error_handling("run_step")
        def run_step(state: ExecutorState) -> Dict[str, Any]:
            ...
            return {"step_results": results}
    """

    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(state: Dict[str, Any]) -> Dict[str, Any]:
            try:
                logger.debug(f"Starting {node_name}")
                result = func(state)
                logger.debug(f"Completed {node_name}: {len(result)} fields returned")
                return result
            except Exception as e:
                logger.exception(f"Error in {node_name}: {e}")
                return {
                    "aborted": True,
                    "continue_execution": False,
                    "errors": [
                        make_error(
                            node_name,
                            "runtime_error",
                            str(e),
                            retryable=isinstance(e, AssistantError),
                            details={"exception_type": type(e).__name__},
                        )
                    ],
                }

        return wrapper

    return decorator
