"""Tests for the transcription relay."""

import base64
import os
from unittest.mock import Mock

import httpx
import pytest
from openai import APIError

from pizza_ai.models import TranscriptionOutcome, TranscriptionSettings
from pizza_ai.services.voice import (
    AUDIO_TOO_SHORT_MESSAGE,
    EMPTY_AUDIO_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    transcribe,
)

WAV = b"RIFF\x24\x00\x00\x00WAVEfmt "
WAV_B64 = base64.b64encode(WAV).decode("ascii")


def _api_error(code):
    request = httpx.Request("POST", "https://api.openai.com/v1/audio/transcriptions")
    return APIError("upstream failure", request, body={"code": code, "message": "x"})


class TestTranscribe:
    """Tests for transcribe()."""

    def setup_method(self):
        self.seen_paths = []
        self.llm = Mock()

    def _record_path(self, result=None, error=None):
        def _side_effect(path, settings):
            self.seen_paths.append(path)
            assert os.path.exists(path)
            with open(path, "rb") as f:
                assert f.read() == WAV
            if error is not None:
                raise error
            return result

        self.llm.transcribe_file.side_effect = _side_effect

    def test_returns_transcribed_text(self, tmp_path):
        self._record_path(result="  A large pepperoni please  ")

        result = transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert result.ok
        assert result.outcome == TranscriptionOutcome.OK
        assert result.text == "A large pepperoni please"

    def test_passes_fixed_language_and_temperature(self, tmp_path):
        self._record_path(result="hi")

        transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        settings = self.llm.transcribe_file.call_args[0][1]
        assert settings == TranscriptionSettings(
            model="whisper-1", language="en", temperature=0.0
        )

    def test_empty_text_returns_placeholder(self, tmp_path):
        self._record_path(result="")

        result = transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert result.text == EMPTY_AUDIO_MESSAGE
        assert result.outcome == TranscriptionOutcome.EMPTY
        assert not result.ok

    def test_audio_too_short_error(self, tmp_path):
        self._record_path(error=_api_error("audio_too_short"))

        result = transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert result.text == AUDIO_TOO_SHORT_MESSAGE
        assert result.outcome == TranscriptionOutcome.TOO_SHORT

    def test_other_api_error_is_unknown(self, tmp_path):
        self._record_path(error=_api_error("invalid_api_key"))

        result = transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert result.text == UNKNOWN_ERROR_MESSAGE
        assert result.outcome == TranscriptionOutcome.UNKNOWN_ERROR

    def test_non_api_error_is_unknown(self, tmp_path):
        self._record_path(error=ConnectionError("network down"))

        result = transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert result.text == UNKNOWN_ERROR_MESSAGE
        assert result.outcome == TranscriptionOutcome.UNKNOWN_ERROR

    def test_invalid_base64_is_unknown(self, tmp_path):
        result = transcribe("not base64!!", self.llm, tmp_dir=str(tmp_path))

        assert result.outcome == TranscriptionOutcome.UNKNOWN_ERROR
        self.llm.transcribe_file.assert_not_called()
        assert list(tmp_path.iterdir()) == []

    def test_accepts_data_url(self, tmp_path):
        self._record_path(result="ok")

        result = transcribe(
            f"data:audio/wav;base64,{WAV_B64}", self.llm, tmp_dir=str(tmp_path)
        )

        assert result.text == "ok"

    def test_accepts_line_wrapped_base64(self, tmp_path):
        audio = bytes(range(100))
        encoded = base64.b64encode(audio).decode("ascii")
        wrapped = encoded[:76] + "\n" + encoded[76:]
        received = []

        def _side_effect(path, settings):
            with open(path, "rb") as f:
                received.append(f.read())
            return "a medium fries"

        self.llm.transcribe_file.side_effect = _side_effect

        result = transcribe(wrapped, self.llm, tmp_dir=str(tmp_path))

        assert result.outcome == TranscriptionOutcome.OK
        assert result.text == "a medium fries"
        assert received == [audio]

    @pytest.mark.parametrize(
        "result,error",
        [
            ("two cokes", None),
            ("", None),
            (None, _api_error("audio_too_short")),
            (None, _api_error("server_error")),
            (None, RuntimeError("boom")),
        ],
    )
    def test_temp_file_removed(self, tmp_path, result, error):
        self._record_path(result=result, error=error)

        transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert len(self.seen_paths) == 1
        assert not os.path.exists(self.seen_paths[0])
        assert list(tmp_path.iterdir()) == []

    def test_each_call_uses_own_temp_file(self, tmp_path):
        self._record_path(result="x")

        transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))
        transcribe(WAV_B64, self.llm, tmp_dir=str(tmp_path))

        assert self.seen_paths[0] != self.seen_paths[1]
        assert all(p.endswith(".wav") for p in self.seen_paths)
