"""
Purpose: Thin client wrapper around OpenAI.
One place for auth, model options, streaming and usage normalization.

No retries: an upstream failure is terminal for the in-flight request and
propagates to the caller.

Testing: Mock SDK calls; assert it yields deltas and maps usage correctly.
"""

from __future__ import annotations
from typing import Callable, Iterator, Optional

import structlog
from openai import OpenAI

from ..models import LLMSettings, TranscriptionSettings

logger = structlog.get_logger()


class OpenAILLMClient:
    def __init__(self, api_key: str, *, client: Optional[OpenAI] = None):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        if client is not None:
            self.client = client
            return
        try:
            self.client = OpenAI(api_key=self.api_key)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}")

    def stream_chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        on_usage: Optional[Callable[[dict], None]] = None,
    ) -> Iterator[str]:
        """
        Yield text fragments as the model produces them. The iterator is lazy
        (nothing is sent until the first ``next``) and can only be consumed once.
        """
        stream = self.client.chat.completions.create(
            model=settings.model,
            messages=messages,
            temperature=settings.temperature,
            top_p=settings.top_p,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
            stream=True,
            stream_options={"include_usage": True},
        )
        logger.debug("chat_stream_opened", model=settings.model, messages=len(messages))
        for chunk in stream:
            usage = getattr(chunk, "usage", None)
            if usage and on_usage:
                on_usage(
                    {
                        "model": getattr(chunk, "model", None) or settings.model,
                        "tokens_in": getattr(usage, "prompt_tokens", 0) or 0,
                        "tokens_out": getattr(usage, "completion_tokens", 0) or 0,
                    }
                )
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            text = getattr(delta, "content", None)
            if text:
                yield text

    def transcribe_file(self, path: str, settings: TranscriptionSettings) -> str:
        with open(path, "rb") as audio:
            resp = self.client.audio.transcriptions.create(
                file=audio,
                model=settings.model,
                language=settings.language,
                temperature=settings.temperature,
            )
        return resp.text or ""
