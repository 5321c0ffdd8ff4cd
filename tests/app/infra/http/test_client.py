"""Testes do HttpClient compartilhado (retry e backoff)."""

from __future__ import annotations

import httpx
import pytest

from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.infra.http import client as client_module


@pytest.fixture(autouse=True)
def _no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []

    async def _fake_backoff(attempt: int, base: float, max_seconds: float) -> None:
        sleeps.append(min((2**attempt) * base, max_seconds))

    monkeypatch.setattr(client_module, "_backoff_sleep", _fake_backoff)
    return sleeps


def _client(handler, max_retries: int = 2) -> HttpClient:
    return HttpClient(
        HttpClientConfig(max_retries=max_retries, backoff_base_seconds=1.0),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_retries_retryable_status_then_succeeds(_no_sleep: list[float]) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={"ok": True})

    response = await _client(handler).post("https://example.test/x", json={"a": 1})

    assert response.status_code == 200
    assert calls["count"] == 3
    assert _no_sleep == [1.0, 2.0]


@pytest.mark.asyncio
async def test_exhausted_retries_raise_with_status_and_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="slow down")

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=1).get("https://example.test/x")

    assert exc_info.value.status_code == 429
    assert exc_info.value.is_retryable is True
    assert exc_info.value.detail == "slow down"


@pytest.mark.asyncio
async def test_client_error_is_returned_without_retry() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(404)

    response = await _client(handler).patch("https://example.test/x", json={})

    assert response.status_code == 404
    assert calls["count"] == 1


@pytest.mark.asyncio
async def test_connection_error_becomes_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timeout", request=request)

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=0).get("https://example.test/x")

    assert exc_info.value.status_code is None
    assert str(exc_info.value) == "http_connection_error"


@pytest.mark.asyncio
async def test_params_and_default_headers_are_sent() -> None:
    captured: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["header"] = request.headers.get("x-default", "")
        return httpx.Response(200)

    client = HttpClient(
        HttpClientConfig(default_headers={"x-default": "1"}),
        transport=httpx.MockTransport(handler),
    )
    await client.get("https://example.test/x", params={"external_id": "eq.abc"})

    assert captured["url"] == "https://example.test/x?external_id=eq.abc"
    assert captured["header"] == "1"


@pytest.mark.asyncio
async def test_read_error_is_not_retried(_no_sleep: list[float]) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        raise httpx.ReadError("connection reset", request=request)

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=3).post("https://example.test/x", json={})

    assert calls["count"] == 1
    assert _no_sleep == []
    assert str(exc_info.value) == "http_transport_error"
    assert exc_info.value.status_code is None
    assert exc_info.value.is_retryable is False
    assert exc_info.value.detail == "ReadError"


@pytest.mark.asyncio
async def test_connect_error_is_retried(_no_sleep: list[float]) -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        if calls["count"] == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200)

    response = await _client(handler).get("https://example.test/x")

    assert response.status_code == 200
    assert calls["count"] == 2
    assert _no_sleep == [1.0]
