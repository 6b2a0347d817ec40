# src/agentic_assistant/config.py
from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, conint, model_validator

ENV_PREFIX = "ASSISTANT_"


def _env(name: str) -> Optional[str]:
    v = os.getenv(f"{ENV_PREFIX}{name}")
    return v.strip() if v and v.strip() else None


class AssistantSettings(BaseModel):
    """Runtime configuration for an assistant session.

    Values come from keyword arguments or, via `from_env`, from ASSISTANT_* environment
    variables. Scripts load a `.env` file with python-dotenv before calling `from_env`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    chat_model: str = "gpt-4.1"
    embedding_model: str = "openai:text-embedding-3-small"
    temperature: float = Field(0.0, ge=0.0, le=2.0)
    max_tokens: conint(ge=1) = 5000

    chunk_size: conint(ge=1) = 1000
    chunk_overlap: conint(ge=0) = 200
    top_k: conint(ge=0) = 3
    history_window: conint(ge=0) = 4
    embed_workers: conint(ge=1, le=64) = 4

    recursion_limit: conint(ge=10) = 100

    @model_validator(mode="after")
    def _check_chunking(self) -> "AssistantSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than chunk_size ({self.chunk_size})"
            )
        return self

    @classmethod
    def from_env(cls, **overrides) -> "AssistantSettings":
        values = {}
        for field_name in cls.model_fields:
            raw = _env(field_name.upper())
            if raw is not None:
                values[field_name] = raw
        values.update(overrides)
        return cls.model_validate(values)
