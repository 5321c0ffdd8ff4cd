"""Dicas de telefone e metadados de request extraídos do transporte.

Os metadados gravados junto do evento passam por `mask_digits`: nenhum
telefone aparece em claro fora do payload original, e o secret nunca é
gravado (apenas o nome do header e se estava presente).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Final

from app.domain.phone import looks_like_phone
from app.services.phone_locator import PhoneHints
from utils.sanitizer import mask_digits

RELAY_KEY: Final[str] = "_relay"
WEBHOOK_PATH_SEGMENT: Final[str] = "argus-webhook"
QUERY_HINT_PARAMS: Final[tuple[str, ...]] = ("ani", "phone", "caller")
RECORDED_HEADERS: Final[tuple[str, ...]] = (
    "user-agent",
    "content-type",
    "x-forwarded-for",
    "x-correlation-id",
)


def _path_segment(path: str) -> str | None:
    segment = path.rstrip("/").rsplit("/", 1)[-1]
    if not segment or segment == WEBHOOK_PATH_SEGMENT:
        return None
    return segment if looks_like_phone(segment) else None


def build_phone_hints(
    *,
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    path: str,
    raw_body: str = "",
    phone_header: str = "x-argus-phone",
    auth_phone: str | None = None,
) -> PhoneHints:
    """Monta `PhoneHints` a partir de header, query string e path."""
    header_values: list[str] = []
    if auth_phone:
        header_values.append(auth_phone)
    explicit = headers.get(phone_header.lower())
    if explicit and explicit.strip():
        header_values.append(explicit.strip())

    query_values = [
        query_params[name].strip()
        for name in QUERY_HINT_PARAMS
        if query_params.get(name) and query_params[name].strip()
    ]

    segment = _path_segment(path)

    return PhoneHints(
        header=tuple(header_values),
        query=tuple(query_values),
        path=(segment,) if segment else (),
        raw_body=raw_body,
    )


def build_request_metadata(
    *,
    method: str,
    path: str,
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    auth_header: str | None,
    received_at: datetime | None = None,
) -> dict[str, Any]:
    """Metadados do request com todos os dígitos mascarados."""
    timestamp = received_at or datetime.now(UTC)
    return {
        "method": method.upper(),
        "path": mask_digits(path),
        "query": {name: mask_digits(value) for name, value in query_params.items()},
        "headers": {
            name: mask_digits(headers[name]) for name in RECORDED_HEADERS if headers.get(name)
        },
        "auth": {"header": auth_header, "present": auth_header is not None},
        "received_at": timestamp.isoformat(),
    }


def enrich_payload(
    stored: Mapping[str, Any],
    hints: PhoneHints,
    request_metadata: Mapping[str, Any],
) -> dict[str, Any]:
    """Copia o payload verbatim e anexa o bloco `_relay`."""
    enriched = dict(stored)
    enriched[RELAY_KEY] = {
        "hints": hints.as_dict(),
        "request": dict(request_metadata),
    }
    return enriched
