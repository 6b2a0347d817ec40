# src/agentic_assistant/model.py

import logging
from typing import Optional

from langchain.chat_models import init_chat_model
from langchain.embeddings import init_embeddings

from agentic_assistant.config import AssistantSettings

logger = logging.getLogger(__name__)


def get_default_model(settings: Optional[AssistantSettings] = None):
    settings = settings or AssistantSettings()
    model = init_chat_model(
        model=settings.chat_model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    return model


def get_default_embeddings(settings: Optional[AssistantSettings] = None):
    settings = settings or AssistantSettings()
    logger.debug(f"Initialising embeddings model {settings.embedding_model}")
    return init_embeddings(settings.embedding_model)
