"""HTTP transport with exponential backoff on rate limits and network failures."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from unburden.errors import TransportError, TransportErrorKind

_LOGGER = logging.getLogger(__name__)

_DEFAULT_MAX_RETRIES = 3
_DEFAULT_BASE_DELAY_SECONDS = 1.0


class RetryTransport:
    """POSTs JSON payloads, retrying only HTTP 429 and network-level failures.

    Any other status, success or not, is handed back to the caller untouched.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        max_retries: int = _DEFAULT_MAX_RETRIES,
        base_delay_seconds: float = _DEFAULT_BASE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._base_delay_seconds = base_delay_seconds
        self._sleep = sleep
        self._transport = transport

    def backoff_delay(self, attempt: int) -> float:
        return self._base_delay_seconds * (2**attempt)

    async def send(
        self,
        endpoint: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """POST ``payload`` to ``endpoint`` and return the final response.

        Raises:
            TransportError: RATE_LIMITED when every attempt was answered with
                429, NETWORK_FAILURE when the last attempt failed to connect.
        """
        timeout = httpx.Timeout(self._timeout_seconds)
        attempt = 0
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            while True:
                try:
                    response = await client.post(
                        endpoint,
                        params=params,
                        headers={"Content-Type": "application/json"},
                        json=payload,
                    )
                except httpx.TransportError as exc:
                    if attempt >= self._max_retries:
                        raise TransportError(
                            TransportErrorKind.NETWORK_FAILURE,
                            f"Request failed after {attempt + 1} attempts: {exc}",
                        ) from exc
                    reason = type(exc).__name__
                else:
                    if response.status_code != 429:
                        return response
                    if attempt >= self._max_retries:
                        raise TransportError(
                            TransportErrorKind.RATE_LIMITED,
                            f"Still rate limited after {attempt + 1} attempts",
                            status_code=429,
                        )
                    reason = "rate limited (429)"

                wait = self.backoff_delay(attempt)
                _LOGGER.warning(
                    "Upstream request failed: %s, retrying in %.2fs (attempt %d/%d)",
                    reason,
                    wait,
                    attempt + 1,
                    self._max_retries,
                )
                await self._sleep(wait)
                attempt += 1
