"""Endpoints do webhook Argus.

Endpoints:
- POST /api/argus-webhook: recebimento de eventos de chamada
- POST /api/argus-webhook/{segment}: idem, com telefone no path

Fluxo:
1. Monta InboundRequest desacoplado do framework
2. Delega ao RelayCallEventUseCase (auth, idempotência, dispatch)
3. Renderiza o desfecho: 401/405 em texto puro, demais em JSON

Qualquer outro método HTTP recebe 405 `Only POST`.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    record_latency,
    record_relay_outcome,
    reset_correlation_id,
    set_correlation_id,
)
from app.use_cases.argus import InboundRequest, RelayResult

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Lazy-loaded use case (inicializado na primeira requisição)
_relay_use_case = None


def _get_relay_use_case():
    """Obtém o use case do relay (lazy-loading)."""
    global _relay_use_case
    if _relay_use_case is None:
        from app.bootstrap import get_relay_use_case

        _relay_use_case = get_relay_use_case()
    return _relay_use_case


async def _build_inbound_request(request: Request) -> InboundRequest:
    return InboundRequest(
        method=request.method,
        path=request.url.path,
        headers={name.lower(): value for name, value in request.headers.items()},
        query_params=dict(request.query_params),
        body=await request.body(),
        received_at=datetime.now(UTC),
    )


def _render(result: RelayResult) -> Response:
    if result.is_plain_text:
        return Response(
            content=result.error or "",
            media_type="text/plain",
            status_code=result.http_status,
        )
    return JSONResponse(content=result.to_body(), status_code=result.http_status)


async def _handle(request: Request) -> Response:
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    start = time.perf_counter()
    try:
        inbound = await _build_inbound_request(request)
        result = await _get_relay_use_case().execute(inbound)

        record_latency(
            "argus_webhook",
            "relay",
            (time.perf_counter() - start) * 1000,
            get_correlation_id(),
        )
        record_relay_outcome(
            result.outcome,
            get_correlation_id(),
            metadata={"http_status": result.http_status},
        )
        return _render(result)

    except Exception:
        logger.exception(
            "argus_webhook_failed",
            extra={"channel": "argus", "correlation_id": get_correlation_id()},
        )
        return JSONResponse(
            content={"status": "internal_error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    finally:
        reset_correlation_id(token)


@router.api_route("", methods=ALLOWED_METHODS, response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos de chamada do Argus.

    Returns:
        Desfecho do relay (JSON) ou Response de erro em texto puro.
    """
    return await _handle(request)


@router.api_route("/{segment}", methods=ALLOWED_METHODS, response_model=None)
async def receive_webhook_with_segment(
    request: Request, segment: str
) -> Response | dict[str, Any]:
    """Mesma entrada, com o telefone de destino no último segmento do path."""
    return await _handle(request)
