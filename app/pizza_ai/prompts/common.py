"""Shared prompt helpers used across prompt modules."""

from __future__ import annotations

from ..models import Message, Role


def assemble(*, system: str, history: list[Message]) -> list[dict[str, str]]:
    """System prompt first, then the conversation in order."""
    return [
        {"role": Role.SYSTEM.value, "content": system},
        *(m.to_dict() for m in history),
    ]
