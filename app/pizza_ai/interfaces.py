"""
Abstractions for pluggable services. The controller depends on these
protocols, not on the OpenAI SDK, so tests can hand it simple fakes.

Common protocols:
- LLMClient.stream_chat(messages, settings) -> Iterator[str]
- LLMClient.transcribe_file(path, settings) -> str
- PromptFactory.build_system() -> str & assemble(...) -> list[dict]
- SecurityGuard.validate_user_input(text) / sanitize_for_prompt(text)
"""

from __future__ import annotations
from typing import Callable, Iterator, Optional, Protocol
from .models import LLMSettings, Message, TranscriptionSettings


class LLMClient(Protocol):
    def stream_chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        on_usage: Optional[Callable[[dict], None]] = None,
    ) -> Iterator[str]: ...

    def transcribe_file(self, path: str, settings: TranscriptionSettings) -> str: ...


class PromptFactory(Protocol):
    def build_system(self) -> str: ...

    def assemble(
        self, *, system: str, history: list[Message]
    ) -> list[dict[str, str]]: ...


class SecurityGuard(Protocol):
    def validate_user_input(self, text: str) -> None: ...

    def sanitize_for_prompt(self, text: str) -> str: ...
