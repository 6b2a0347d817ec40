"""Agentic assistant built on LangGraph.

This package plans and executes multi-step answers with a clear separation between:
- Planner: turn a request plus recent conversation into an ordered capability plan
- Executor: run plan steps in order, threading step outputs through placeholders
- Capabilities: knowledge retrieval, web search, code generation, summarization, image analysis
- Retrieval: chunk, embed and rank uploaded documents in an in-memory vector index
"""

__version__ = "0.1.0"
