"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from api.routes.health import router as health_router
from api.routes.health.router import health_check, readiness_check
from app.infra.stores.memory_stores import MemoryEventStore
from config.settings import (
    BaseSettings,
    EventStoreSettings,
    SupabaseSettings,
    VapiSettings,
)
from utils.errors import EventStoreError


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _patch_settings(
    monkeypatch: pytest.MonkeyPatch,
    *,
    backend: str = "memory",
    vapi_key: str = "vapi-key",
    supabase_url: str = "",
) -> None:
    monkeypatch.setattr(
        health_router, "get_base_settings", lambda: BaseSettings(environment="development")
    )
    monkeypatch.setattr(
        health_router, "get_event_store_settings", lambda: EventStoreSettings(backend=backend)
    )
    monkeypatch.setattr(
        health_router,
        "get_supabase_settings",
        lambda: SupabaseSettings(url=supabase_url, service_role_key="k" if supabase_url else ""),
    )
    monkeypatch.setattr(health_router, "get_vapi_settings", lambda: VapiSettings(api_key=vapi_key))


@pytest.mark.asyncio
async def test_health_check_is_always_healthy() -> None:
    response = await health_check()

    assert response.status == "healthy"
    assert response.service == "argus-relay"


@pytest.mark.asyncio
async def test_readiness_ready_with_memory_store(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch)
    request = _build_request_with_state(SimpleNamespace(event_store=MemoryEventStore()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["event_store"]["status"] == "ok"
    assert payload["checks"]["call_dispatcher"]["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_not_ready_without_vapi_key(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, vapi_key="")
    request = _build_request_with_state(SimpleNamespace(event_store=MemoryEventStore()))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["call_dispatcher"] == {
        "status": "failed",
        "latency_ms": None,
        "error": "not_configured",
    }


@pytest.mark.asyncio
async def test_readiness_fails_when_supabase_not_configured(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _patch_settings(monkeypatch, backend="supabase")
    request = _build_request_with_state(SimpleNamespace(event_store=None))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["event_store"]["error"] == "not_configured"


@pytest.mark.asyncio
async def test_readiness_fails_when_store_probe_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_settings(monkeypatch, backend="supabase", supabase_url="https://proj.supabase.test")
    store = SimpleNamespace(fetch=AsyncMock(side_effect=EventStoreError("down")))
    request = _build_request_with_state(SimpleNamespace(event_store=store))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["event_store"]["status"] == "failed"
    assert payload["checks"]["event_store"]["error"] == "EventStoreError"


@pytest.mark.asyncio
async def test_readiness_degraded_before_store_initialized(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _patch_settings(monkeypatch)
    request = _build_request_with_state(SimpleNamespace())

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["checks"]["event_store"]["status"] == "degraded"
