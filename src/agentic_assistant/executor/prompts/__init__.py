"""Prompt templates for capability handlers."""
