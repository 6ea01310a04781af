"""Base64 helpers for moving recorded audio between the UI and the relay."""

from __future__ import annotations
import base64
import binascii


def encode_audio(data: bytes) -> str:
    """Return the bare base64 payload (no data-URL prefix) for audio bytes."""
    return base64.b64encode(data or b"").decode("ascii")


def decode_audio(payload: str) -> bytes:
    """
    Decode base64 audio. A data URL such as ``data:audio/wav;base64,AAAA``
    is accepted too; everything up to the first comma is dropped. Line-wrapped
    (MIME-style) payloads are accepted; whitespace is not part of the alphabet.
    """
    text = (payload or "").strip()
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    text = "".join(text.split())
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 audio payload: {e}")
