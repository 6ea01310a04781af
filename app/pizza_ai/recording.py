"""
Purpose: Voice capture buffer. Collects audio chunks between start and stop
and hands back one WAV blob.

The browser side is `audio_recorder_streamlit`; Streamlit reruns the whole
script after every widget event, so the same recording is returned more than
once. The submitted-signature check keeps a recording from being sent twice.
"""

from __future__ import annotations
from typing import Optional

from .models import AudioBlob


class RecordingSession:
    def __init__(self, mime_type: str = "audio/wav") -> None:
        self.mime_type = mime_type
        self._chunks: list[bytes] = []
        self._recording: bool = False
        self._last_submitted: Optional[str] = None

    @property
    def recording(self) -> bool:
        return self._recording

    def start(self) -> None:
        """Begin a new recording; any previous chunks are dropped."""
        self._chunks = []
        self._recording = True

    def add_chunk(self, chunk: bytes) -> None:
        if self._recording and chunk:
            self._chunks.append(bytes(chunk))

    def stop(self) -> AudioBlob:
        """End the recording and return all chunks as a single blob."""
        self._recording = False
        blob = AudioBlob(b"".join(self._chunks), mime_type=self.mime_type)
        self._chunks = []
        return blob

    def capture(self, data: bytes) -> AudioBlob:
        """Record a widget payload that arrives already complete."""
        self.start()
        self.add_chunk(data)
        return self.stop()

    def is_new(self, blob: AudioBlob) -> bool:
        return bool(blob.data) and blob.signature != self._last_submitted

    def mark_submitted(self, blob: AudioBlob) -> None:
        self._last_submitted = blob.signature
