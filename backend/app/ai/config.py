from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gemini-2.0-flash-001"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = 8192
    timeout_ms: int = 10_000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        config = cls(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_tokens=_int_env("GEMINI_MAX_TOKENS", 8192),
            timeout_ms=_int_env("GEMINI_TIMEOUT_MS", 10_000),
            debug=os.getenv("GEMINI_DEBUG", "false").lower() == "true",
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY is not set")
        if not 0 < self.max_tokens <= 32_000:
            raise RuntimeError("GEMINI_MAX_TOKENS must be in 1-32000")
        if not 0 < self.timeout_ms <= 60_000:
            raise RuntimeError("GEMINI_TIMEOUT_MS must be in 1-60000")

    def safe_dict(self) -> dict:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "timeout_ms": self.timeout_ms,
            "debug": self.debug,
            "has_api_key": bool(self.api_key),
        }


def model_name() -> str:
    return os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
