# src/agentic_assistant/executor/template.py
"""Placeholder resolution for step prompts.

A prompt template is split once into a token list of literal text and `{{step_N_output}}`
placeholders. Resolution walks the tokens: a placeholder whose step is an earlier, completed
step is replaced by that step's output; anything else is written back verbatim. Substituted
output is never scanned again, so an output that itself contains a placeholder stays literal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Union

from agentic_assistant.executor.state import step_key

PLACEHOLDER_OPEN = "{{step_"
PLACEHOLDER_CLOSE = "_output}}"


@dataclass(frozen=True)
class TextToken:
    text: str


@dataclass(frozen=True)
class Placeholder:
    position: int  # 1-based step position
    raw: str

    @property
    def key(self) -> str:
        return step_key(self.position)


Token = Union[TextToken, Placeholder]


def _parse_placeholder(template: str, start: int) -> Optional[Placeholder]:
    digits_start = start + len(PLACEHOLDER_OPEN)
    end = digits_start
    while end < len(template) and template[end] in "0123456789":
        end += 1
    if end == digits_start or not template.startswith(PLACEHOLDER_CLOSE, end):
        return None
    # Step numbers are written without leading zeros.
    if template[digits_start] == "0" and end - digits_start > 1:
        return None
    stop = end + len(PLACEHOLDER_CLOSE)
    return Placeholder(position=int(template[digits_start:end]), raw=template[start:stop])


def tokenize(template: str) -> List[Token]:
    tokens: List[Token] = []
    buf: List[str] = []
    i = 0
    while i < len(template):
        start = template.find(PLACEHOLDER_OPEN, i)
        if start < 0:
            buf.append(template[i:])
            break

        placeholder = _parse_placeholder(template, start)
        if placeholder is None:
            # Not a well-formed placeholder: keep the opening brace as text and move on.
            buf.append(template[i : start + 1])
            i = start + 1
            continue

        buf.append(template[i:start])
        text = "".join(buf)
        if text:
            tokens.append(TextToken(text))
        buf = []
        tokens.append(placeholder)
        i = start + len(placeholder.raw)

    text = "".join(buf)
    if text:
        tokens.append(TextToken(text))
    return tokens


def resolve_tokens(tokens: List[Token], outputs: Mapping[str, str], *, current_position: int) -> str:
    parts: List[str] = []
    for token in tokens:
        if isinstance(token, Placeholder):
            if 1 <= token.position < current_position and token.key in outputs:
                parts.append(outputs[token.key])
            else:
                parts.append(token.raw)
        else:
            parts.append(token.text)
    return "".join(parts)


def resolve_prompt(template: str, outputs: Mapping[str, str], *, current_position: int) -> str:
    """Substitute outputs of steps before `current_position` (1-based) into `template`."""
    return resolve_tokens(tokenize(template), outputs, current_position=current_position)
