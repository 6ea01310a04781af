"""
Purpose: The single orchestration point for an ordering session. Owns the
conversation history and the voice recording buffer.
Prevents UI from knowing how prompts/LLM/services work.

Key responsibilities:
- Hold the append-only history (list of messages).
- Build the system prompt using prompts.DefaultPromptFactory.
- Assemble messages (system + history) and stream the reply via LLMClient.
- Apply input guardrails (services.security).
- Relay recorded audio to services.voice for transcription.
- reset() clears the conversation and usage counters.

Testing: Pure unit tests with a fake LLMClient. Verify message assembly,
ordering and error propagation.
"""

from __future__ import annotations
from typing import Iterator, Optional

import structlog

from .config import Settings
from .interfaces import LLMClient, PromptFactory, SecurityGuard
from .models import (
    AudioBlob,
    Message,
    Role,
    SessionState,
    TranscriptionResult,
    UsageStats,
)
from .prompts import DefaultPromptFactory
from .recording import RecordingSession
from .services.security import DefaultSecurity
from .services.voice import transcribe
from .utils.audio import encode_audio

logger = structlog.get_logger()


class PizzaOrderController:
    def __init__(self, llm: LLMClient, settings: Optional[Settings] = None):
        self.llm: LLMClient = llm
        self.settings: Settings = settings or Settings()
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security: SecurityGuard = DefaultSecurity()
        self.state = SessionState()
        self.recorder = RecordingSession()
        self.usage = UsageStats()

    def get_history(self) -> list[Message]:
        """Get the current full history of messages."""
        return self.state.history

    def append_user(self, text: str) -> Message:
        """Validate, clean and append a user message to history."""
        self.security.validate_user_input(text)
        msg = Message(Role.USER, self.security.sanitize_for_prompt(text))
        self.state.history.append(msg)
        return msg

    def append_assistant(self, text: str) -> Message:
        """Append an assistant message to history."""
        msg = Message(Role.ASSISTANT, text)
        self.state.history.append(msg)
        return msg

    def reset(self) -> None:
        """Clear history and token counters."""
        self.state = SessionState()
        self.usage = UsageStats()

    def continue_conversation(self, messages: list[Message]) -> Iterator[str]:
        """
        Send the conversation (system prompt first) to the model and return
        the lazy stream of reply fragments. Upstream errors are not caught.
        """
        system_prompt = self.prompts.build_system()
        payload = self.prompts.assemble(system=system_prompt, history=messages)
        logger.info(
            "conversation_started",
            messages=len(messages),
            model=self.settings.llm.model,
        )
        return self.llm.stream_chat(
            payload, self.settings.llm, on_usage=self.usage.add
        )

    def submit(self, user_text: str) -> Iterator[str]:
        """
        One chat turn. The user message is validated and appended right away
        (ValueError surfaces before anything is streamed); the returned
        iterator yields the assistant reply and appends it to history once
        the model finishes its turn.
        """
        self.append_user(user_text)
        return self._relay(list(self.state.history))

    def _relay(self, messages: list[Message]) -> Iterator[str]:
        parts: list[str] = []
        for fragment in self.continue_conversation(messages):
            parts.append(fragment)
            yield fragment
        reply = "".join(parts)
        if not reply:
            logger.warning("conversation_empty_reply")
            return
        self.append_assistant(reply)
        logger.info("conversation_finished", chars=len(reply))

    def capture_audio(self, wav_bytes: bytes) -> Optional[AudioBlob]:
        """Package recorder output; None if it was already submitted."""
        blob = self.recorder.capture(wav_bytes)
        return blob if self.recorder.is_new(blob) else None

    def voice_to_text(self, blob: AudioBlob) -> TranscriptionResult:
        """Send a recording to the transcription relay."""
        result = transcribe(
            encode_audio(blob.data),
            self.llm,
            settings=self.settings.transcription,
            tmp_dir=self.settings.tmp_dir,
        )
        self.recorder.mark_submitted(blob)
        return result
