"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_base_settings,
    get_event_store_settings,
    get_supabase_settings,
    get_vapi_settings,
)
from utils.errors import EventStoreError

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "argus-relay"
# Chave que nunca é gerada pelo relay; a leitura só prova conectividade
STORE_PROBE_ID = "__readiness_probe__"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: log de eventos alcançável e Vapi configurada."""
    store_check = await _check_event_store(getattr(request.app.state, "event_store", None))
    dispatcher_check = _check_call_dispatcher()

    ready = store_check.status in {"ok", "degraded"} and dispatcher_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "event_store": store_check.as_dict(),
            "call_dispatcher": dispatcher_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_event_store(event_store: Any | None) -> DependencyCheck:
    settings = get_event_store_settings()
    errors = settings.validate(get_base_settings())
    if settings.backend == "supabase":
        errors.extend(get_supabase_settings().validate())
    if errors:
        return DependencyCheck(status="failed", error="not_configured")

    if event_store is None:
        return DependencyCheck(status="degraded", error="not_initialized")

    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(event_store.fetch(STORE_PROBE_ID), timeout=3.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except EventStoreError as exc:
        logger.warning("readiness_event_store_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


def _check_call_dispatcher() -> DependencyCheck:
    if get_vapi_settings().validate():
        return DependencyCheck(status="failed", error="not_configured")
    return DependencyCheck(status="ok")
