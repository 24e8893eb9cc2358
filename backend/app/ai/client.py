"""Gemini text generation client.

Wraps the google-generativeai SDK behind ``generate_text(prompt) -> str``.
Every upstream failure surfaces as a classified ``GeminiError``; timeouts,
network failures and rate limiting are retried with exponential backoff.
"""
from __future__ import annotations

import logging
import math
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Optional, Protocol

import google.generativeai as genai

from app.ai.config import GeminiConfig
from app.ai.errors import GeminiError, GeminiErrorType, to_gemini_error

log = logging.getLogger(__name__)

RESERVED_OUTPUT_TOKENS = 2000
MAX_ATTEMPTS = 3
BACKOFF_SECONDS = 1.0
USAGE_LOG_LIMIT = 100


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...


def estimate_tokens(text: str) -> int:
    # rough: one token per four characters
    return math.ceil(len(text) / 4)


@dataclass
class UsageLog:
    model: str
    input_tokens: int
    output_tokens: int
    latency_ms: int
    success: bool
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class GeminiClient:
    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
        model: Any = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or GeminiConfig.from_env()
        if model is None:
            genai.configure(api_key=self.config.api_key)
            model = genai.GenerativeModel(self.config.model)
        self._model = model
        self._sleep = sleep
        self.usage_logs: deque[UsageLog] = deque(maxlen=USAGE_LOG_LIMIT)
        if self.config.debug:
            log.debug("gemini config %s", self.config.safe_dict())

    def generate_text(self, prompt: str) -> str:
        return self.generate_text_with_options(prompt, temperature=0.7, top_p=0.9)

    def generate_text_with_options(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
    ) -> str:
        max_tokens = max_tokens or self.config.max_tokens
        available = max_tokens - RESERVED_OUTPUT_TOKENS
        if estimate_tokens(prompt) > available:
            raise GeminiError(
                GeminiErrorType.QUOTA_EXCEEDED,
                f"입력 텍스트가 너무 깁니다. 최대 {available} 토큰까지 허용됩니다.",
            )

        generation_config = {"max_output_tokens": max_tokens}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if top_p is not None:
            generation_config["top_p"] = top_p
        if top_k is not None:
            generation_config["top_k"] = top_k

        return self._execute(prompt, generation_config)

    def _call(self, prompt: str, generation_config: dict) -> str:
        response = self._model.generate_content(
            prompt,
            generation_config=generation_config,
            request_options={"timeout": self.config.timeout_ms / 1000},
        )
        return response.text or ""

    def _with_retry(self, prompt: str, generation_config: dict) -> str:
        last: Optional[GeminiError] = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                return self._call(prompt, generation_config)
            except Exception as exc:
                last = to_gemini_error(exc)
                if not last.retryable or attempt == MAX_ATTEMPTS:
                    raise last from exc
                delay = BACKOFF_SECONDS * 2 ** (attempt - 1)
                log.warning("gemini attempt %d failed (%s), retrying in %.1fs", attempt, last.type.value, delay)
                self._sleep(delay)
        raise last or GeminiError(GeminiErrorType.UNKNOWN)

    def _execute(self, prompt: str, generation_config: dict) -> str:
        started = time.monotonic()
        try:
            text = self._with_retry(prompt, generation_config)
        except GeminiError as err:
            self._record(UsageLog(
                model=self.config.model,
                input_tokens=estimate_tokens(prompt),
                output_tokens=0,
                latency_ms=int((time.monotonic() - started) * 1000),
                success=False,
                error=err.safe_message,
            ))
            raise

        self._record(UsageLog(
            model=self.config.model,
            input_tokens=estimate_tokens(prompt),
            output_tokens=estimate_tokens(text),
            latency_ms=int((time.monotonic() - started) * 1000),
            success=True,
        ))
        return text

    def _record(self, entry: UsageLog) -> None:
        self.usage_logs.append(entry)
        log.info(
            "gemini usage model=%s in=%d out=%d latency_ms=%d success=%s",
            entry.model, entry.input_tokens, entry.output_tokens, entry.latency_ms, entry.success,
        )

    def health_check(self) -> bool:
        try:
            return bool(self.generate_text("Hello"))
        except GeminiError as err:
            log.error("gemini health check failed: %s", err.type.value)
            return False

    def clear_usage_logs(self) -> None:
        self.usage_logs.clear()

    def usage_stats(self) -> dict:
        total = len(self.usage_logs)
        ok = sum(1 for u in self.usage_logs if u.success)
        return {
            "total_requests": total,
            "success_rate": (ok / total) * 100 if total else 0,
            "average_latency_ms": sum(u.latency_ms for u in self.usage_logs) / total if total else 0,
            "total_tokens": sum(u.input_tokens + u.output_tokens for u in self.usage_logs),
        }


@lru_cache(maxsize=1)
def get_gemini_client() -> GeminiClient:
    return GeminiClient()


AIProvider = Callable[[], TextGenerator]


def get_ai_provider() -> AIProvider:
    # routes build the client lazily, after their own validation and auth
    return get_gemini_client
