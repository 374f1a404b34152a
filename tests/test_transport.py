"""Tests for RetryTransport backoff behaviour."""

from __future__ import annotations

import time

import httpx
import pytest

from unburden.errors import TransportError, TransportErrorKind
from unburden.llm.transport import RetryTransport

_ENDPOINT = "https://llm.example.com/models/test:generateContent"


def _scripted(*outcomes: httpx.Response | Exception) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    queue = list(outcomes)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        outcome = queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return httpx.MockTransport(handler), seen


class _RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.mark.asyncio
async def test_retries_rate_limit_then_returns_success():
    mock, seen = _scripted(httpx.Response(429), httpx.Response(429), httpx.Response(200, json={"ok": True}))
    sleep = _RecordingSleep()
    transport = RetryTransport(base_delay_seconds=1.0, sleep=sleep, transport=mock)

    response = await transport.send(_ENDPOINT, {"contents": []})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert len(seen) == 3
    assert sleep.delays == [1.0, 2.0]
    assert sum(sleep.delays) == pytest.approx(1.0 * (2**0 + 2**1))


@pytest.mark.asyncio
async def test_backoff_waits_really_elapse():
    mock, _ = _scripted(httpx.Response(429), httpx.Response(429), httpx.Response(200, json={}))
    transport = RetryTransport(base_delay_seconds=0.02, transport=mock)

    started = time.monotonic()
    response = await transport.send(_ENDPOINT, {})
    elapsed = time.monotonic() - started

    assert response.status_code == 200
    assert elapsed >= 0.06 * 0.9
    assert elapsed < 2.0


@pytest.mark.asyncio
async def test_exhausted_rate_limit_raises_rate_limited():
    mock, seen = _scripted(*[httpx.Response(429) for _ in range(4)])
    sleep = _RecordingSleep()
    transport = RetryTransport(max_retries=3, base_delay_seconds=0.5, sleep=sleep, transport=mock)

    with pytest.raises(TransportError) as excinfo:
        await transport.send(_ENDPOINT, {})

    assert excinfo.value.kind is TransportErrorKind.RATE_LIMITED
    assert excinfo.value.status_code == 429
    assert len(seen) == 4
    assert sleep.delays == [0.5, 1.0, 2.0]


@pytest.mark.asyncio
async def test_network_failure_is_retried():
    mock, seen = _scripted(httpx.ConnectError("connection refused"), httpx.Response(200, json={}))
    sleep = _RecordingSleep()
    transport = RetryTransport(sleep=sleep, transport=mock)

    response = await transport.send(_ENDPOINT, {})

    assert response.status_code == 200
    assert len(seen) == 2
    assert sleep.delays == [1.0]


@pytest.mark.asyncio
async def test_exhausted_network_failures_raise_network_failure():
    mock, seen = _scripted(*[httpx.ReadTimeout("timed out") for _ in range(3)])
    transport = RetryTransport(max_retries=2, sleep=_RecordingSleep(), transport=mock)

    with pytest.raises(TransportError) as excinfo:
        await transport.send(_ENDPOINT, {})

    assert excinfo.value.kind is TransportErrorKind.NETWORK_FAILURE
    assert isinstance(excinfo.value.__cause__, httpx.ReadTimeout)
    assert len(seen) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 403, 500, 503])
async def test_other_statuses_are_returned_without_retry(status):
    mock, seen = _scripted(httpx.Response(status, json={"error": "nope"}))
    sleep = _RecordingSleep()
    transport = RetryTransport(sleep=sleep, transport=mock)

    response = await transport.send(_ENDPOINT, {})

    assert response.status_code == status
    assert len(seen) == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_sends_json_body_and_query_params():
    mock, seen = _scripted(httpx.Response(200, json={}))
    transport = RetryTransport(transport=mock)

    await transport.send(_ENDPOINT, {"contents": [{"role": "user"}]}, params={"key": "secret"})

    request = seen[0]
    assert request.method == "POST"
    assert request.url.params["key"] == "secret"
    assert request.headers["Content-Type"] == "application/json"
    assert b'"contents"' in request.content


def test_backoff_delay_doubles():
    transport = RetryTransport(base_delay_seconds=1.5)
    assert [transport.backoff_delay(a) for a in range(4)] == [1.5, 3.0, 6.0, 12.0]
