"""
Purpose: speech-to-text integration. Allow voice-based orders.

The audio is written to a per-call temp file because the transcription
endpoint wants a named file upload; the file is always removed afterwards.
"""

from __future__ import annotations
import os
import tempfile
from typing import Optional

import structlog
from openai import APIError

from ..interfaces import LLMClient
from ..models import (
    TranscriptionOutcome,
    TranscriptionResult,
    TranscriptionSettings,
)
from ..utils.audio import decode_audio

logger = structlog.get_logger()

EMPTY_AUDIO_MESSAGE = "The audio provided was empty. Please try again"
AUDIO_TOO_SHORT_MESSAGE = (
    "The audio is too short. minimum audio length should be at least 0.1 seconds"
)
UNKNOWN_ERROR_MESSAGE = "Unknown error"

AUDIO_TOO_SHORT_CODE = "audio_too_short"


def transcribe(
    base64_audio: str,
    llm: LLMClient,
    *,
    settings: Optional[TranscriptionSettings] = None,
    tmp_dir: Optional[str] = None,
) -> TranscriptionResult:
    """
    Transcribe base64-encoded WAV audio. Never raises: every failure maps to a
    TranscriptionResult whose text is safe to show to the user.
    """
    settings = settings or TranscriptionSettings()
    tmp_path: Optional[str] = None

    try:
        audio_bytes = decode_audio(base64_audio)
        with tempfile.NamedTemporaryFile(
            delete=False, suffix=".wav", dir=tmp_dir
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(audio_bytes)

        text = llm.transcribe_file(tmp_path, settings).strip()
        if not text:
            logger.warning("transcription_empty", audio_bytes=len(audio_bytes))
            return TranscriptionResult(EMPTY_AUDIO_MESSAGE, TranscriptionOutcome.EMPTY)

        logger.info("transcription_done", audio_bytes=len(audio_bytes), chars=len(text))
        return TranscriptionResult(text)
    except APIError as e:
        code = getattr(e, "code", None)
        logger.error("transcription_failed", code=code, error=str(e))
        if code == AUDIO_TOO_SHORT_CODE:
            return TranscriptionResult(
                AUDIO_TOO_SHORT_MESSAGE, TranscriptionOutcome.TOO_SHORT
            )
        return TranscriptionResult(
            UNKNOWN_ERROR_MESSAGE, TranscriptionOutcome.UNKNOWN_ERROR
        )
    except Exception as e:
        logger.error("transcription_failed", code=None, error=str(e), exc_info=True)
        return TranscriptionResult(
            UNKNOWN_ERROR_MESSAGE, TranscriptionOutcome.UNKNOWN_ERROR
        )
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
