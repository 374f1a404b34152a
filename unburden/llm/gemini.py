"""Gemini implementation of LLMProvider."""

from __future__ import annotations

import logging
from typing import Any

from unburden.config import Settings
from unburden.errors import ParseError, ParseErrorKind, TransportError, TransportErrorKind
from unburden.llm.base import LLMProvider
from unburden.llm.transport import RetryTransport

_LOGGER = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """LLM provider using the Gemini ``generateContent`` endpoint."""

    def __init__(self, settings: Settings, transport: RetryTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport or RetryTransport(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.retry_max_retries,
            base_delay_seconds=settings.retry_base_delay_seconds,
        )

    @property
    def endpoint(self) -> str:
        base_url = self._settings.gemini_base_url.rstrip("/")
        return f"{base_url}/models/{self._settings.gemini_model}:generateContent"

    async def generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._transport.send(
            self.endpoint,
            payload,
            params={"key": self._settings.gemini_api_key},
        )
        if not response.is_success:
            _LOGGER.error("Gemini API error: status=%d body=%r", response.status_code, response.text[:500])
            raise TransportError(
                TransportErrorKind.UPSTREAM_SERVER_ERROR,
                f"Gemini API request failed: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError(ParseErrorKind.INVALID_JSON, f"Gemini reply is not JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ParseError(ParseErrorKind.NO_CANDIDATES, "Gemini reply is not a JSON object")

        _LOGGER.info("Gemini response: candidates=%d", len(data.get("candidates") or []))
        return data
