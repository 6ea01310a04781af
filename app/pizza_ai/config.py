"""Runtime configuration, read from the environment (and a local .env file)."""

from __future__ import annotations
import os
import tempfile
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .models import LLMSettings, TranscriptionSettings

ENV_PREFIX = "PIZZA_AI_"


@dataclass
class Settings:
    openai_api_key: Optional[str] = None
    llm: LLMSettings = field(default_factory=LLMSettings)
    transcription: TranscriptionSettings = field(default_factory=TranscriptionSettings)
    tmp_dir: str = field(default_factory=tempfile.gettempdir)
    log_level: str = "INFO"
    log_format: str = "dev"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    return value if value not in (None, "") else default


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")


def load_settings(*, dotenv: bool = True) -> Settings:
    """Build Settings from env vars. Unset vars keep their defaults."""
    if dotenv:
        load_dotenv()

    defaults = Settings()
    llm = LLMSettings(
        model=_env("CHAT_MODEL", defaults.llm.model),
        temperature=_env_float("TEMPERATURE", defaults.llm.temperature),
        top_p=defaults.llm.top_p,
        max_tokens=_env_int("MAX_TOKENS", defaults.llm.max_tokens),
        timeout=_env_float("TIMEOUT", defaults.llm.timeout),
    )
    transcription = TranscriptionSettings(
        model=_env("STT_MODEL", defaults.transcription.model),
        language=_env("STT_LANGUAGE", defaults.transcription.language),
        temperature=defaults.transcription.temperature,
    )
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        llm=llm,
        transcription=transcription,
        tmp_dir=_env("TMP_DIR", defaults.tmp_dir),
        log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
        log_format=_env("LOG_FORMAT", defaults.log_format),
    )
