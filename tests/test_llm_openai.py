"""Tests for the OpenAI client wrapper."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from pizza_ai.models import LLMSettings, TranscriptionSettings
from pizza_ai.services.llm_openai import OpenAILLMClient


def _chunk(text=None, usage=None, model="gpt-4o-mini"):
    choices = [] if text is None else [SimpleNamespace(delta=SimpleNamespace(content=text))]
    return SimpleNamespace(choices=choices, usage=usage, model=model)


class TestOpenAILLMClient:
    """Tests for OpenAILLMClient."""

    def setup_method(self):
        self.sdk = Mock()
        self.client = OpenAILLMClient(api_key="sk-test", client=self.sdk)
        self.settings = LLMSettings(model="gpt-4o-mini", timeout=30.0)

    def test_missing_api_key(self):
        with pytest.raises(RuntimeError, match="Missing OPENAI_API_KEY"):
            OpenAILLMClient(api_key="")

    def test_stream_chat_yields_deltas(self):
        self.sdk.chat.completions.create.return_value = iter(
            [_chunk("Hello"), _chunk(""), _chunk(" pizza"), _chunk(None)]
        )

        out = list(
            self.client.stream_chat([{"role": "user", "content": "hi"}], self.settings)
        )

        assert out == ["Hello", " pizza"]

    def test_stream_chat_request_shape(self):
        self.sdk.chat.completions.create.return_value = iter([])

        list(
            self.client.stream_chat(
                [
                    {"role": "system", "content": "SYS"},
                    {"role": "user", "content": "hi"},
                ],
                self.settings,
            )
        )

        kwargs = self.sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["stream"] is True
        assert kwargs["timeout"] == 30.0
        assert kwargs["messages"] == [
            {"role": "system", "content": "SYS"},
            {"role": "user", "content": "hi"},
        ]

    def test_stream_chat_is_lazy(self):
        self.client.stream_chat([], self.settings)

        self.sdk.chat.completions.create.assert_not_called()

    def test_stream_chat_reports_usage(self):
        usage = SimpleNamespace(prompt_tokens=50, completion_tokens=7)
        self.sdk.chat.completions.create.return_value = iter(
            [_chunk("Hi"), _chunk(None, usage=usage)]
        )
        on_usage = Mock()

        list(self.client.stream_chat([], self.settings, on_usage=on_usage))

        on_usage.assert_called_once_with(
            {"model": "gpt-4o-mini", "tokens_in": 50, "tokens_out": 7}
        )

    def test_stream_chat_errors_propagate(self):
        self.sdk.chat.completions.create.side_effect = RuntimeError("503")

        with pytest.raises(RuntimeError, match="503"):
            list(self.client.stream_chat([], self.settings))

    def test_transcribe_file(self, tmp_path):
        audio = tmp_path / "in.wav"
        audio.write_bytes(b"RIFF")
        self.sdk.audio.transcriptions.create.return_value = SimpleNamespace(
            text="hello"
        )

        text = self.client.transcribe_file(
            str(audio), TranscriptionSettings(model="whisper-1", language="en")
        )

        assert text == "hello"
        kwargs = self.sdk.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["language"] == "en"
        assert kwargs["temperature"] == 0.0
        assert kwargs["file"].name == str(audio)

    def test_transcribe_file_none_text(self, tmp_path):
        audio = tmp_path / "in.wav"
        audio.write_bytes(b"RIFF")
        self.sdk.audio.transcriptions.create.return_value = SimpleNamespace(text=None)

        assert self.client.transcribe_file(str(audio), TranscriptionSettings()) == ""
