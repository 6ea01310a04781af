"""Facade over the prompt modules, the DefaultPromptFactory the controller uses."""

from __future__ import annotations
from functools import lru_cache

from pizza_ai.models import Message
from . import order_taker as _order_taker
from .common import assemble as _assemble


@lru_cache(maxsize=1)
def _system_prompt() -> str:
    return _order_taker.build_order_taker_system()


class DefaultPromptFactory:
    # ORDER TAKING
    def build_system(self) -> str:
        return _system_prompt()

    def assemble(
        self, *, system: str, history: list[Message]
    ) -> list[dict[str, str]]:
        return _assemble(system=system, history=history)
