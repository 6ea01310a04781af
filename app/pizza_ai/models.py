"""
Canonical data shapes, shared truth for typing between layers.

Typical contents:
- Role, Message (role, content).
- LLMSettings (model, temperature, top_p, max_tokens, timeout).
- TranscriptionSettings / TranscriptionResult for the voice relay.
- AudioBlob for a finished microphone recording.

Testing: Trivial; mostly types.
"""

from __future__ import annotations
import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass
class Message:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": Role(self.role).value, "content": self.content}


@dataclass
class SessionState:
    history: list[Message] = field(default_factory=list)


@dataclass
class LLMSettings:
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 512
    timeout: float = 30.0


@dataclass
class TranscriptionSettings:
    model: str = "whisper-1"
    language: str = "en"
    temperature: float = 0.0


class TranscriptionOutcome(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    TOO_SHORT = "too_short"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True)
class TranscriptionResult:
    text: str
    outcome: TranscriptionOutcome = TranscriptionOutcome.OK

    @property
    def ok(self) -> bool:
        return self.outcome == TranscriptionOutcome.OK


@dataclass(frozen=True)
class AudioBlob:
    data: bytes
    mime_type: str = "audio/wav"

    @property
    def signature(self) -> str:
        return hashlib.sha1(self.data).hexdigest()


@dataclass
class UsageStats:
    tokens_in: int = 0
    tokens_out: int = 0
    model_used: Optional[str] = None

    def add(self, meta: dict) -> None:
        self.tokens_in += int(meta.get("tokens_in", 0))
        self.tokens_out += int(meta.get("tokens_out", 0))
        self.model_used = meta.get("model") or self.model_used


@dataclass(frozen=True)
class Price:
    input_per_1M: float
    output_per_1M: float
