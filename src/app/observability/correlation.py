"""Correlation id por request do webhook.

O Argus pode enviar `x-correlation-id`; sem ele, cada entrega recebe um
UUID novo. O valor vive em uma ContextVar (async-safe) e é injetado em
todo log pelo `CorrelationIdFilter`.

Uso:
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

CORRELATION_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """correlation_id do contexto atual (string vazia fora de request)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera UUID quando ausente.

    Returns:
        Token para `reset_correlation_id`.
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Lê o header de correlação, ignorando valores vazios."""
    value = headers.get(CORRELATION_HEADER, "").strip()
    return value or None
