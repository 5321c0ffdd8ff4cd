"""Chave de idempotência para eventos Argus."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

from app.domain.payload import InboundPayload, StructuredPayload
from app.services.phone_locator import is_placeholder

if TYPE_CHECKING:
    from app.services.phone_locator import PhoneHints

EVENT_ID_PREFIX: Final[str] = "argus"
DIGEST_HEX_LENGTH: Final[int] = 32
ID_FIELDS: Final[tuple[str, ...]] = ("id", "call_id", "callId")


def _caller_id(fields: Mapping[str, Any]) -> str | None:
    candidates: list[object] = [fields.get(name) for name in ID_FIELDS]
    call = fields.get("call")
    if isinstance(call, Mapping):
        candidates.append(call.get("id"))

    for value in candidates:
        # bool é subclasse de int
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and value.strip() and not is_placeholder(value):
            return value
    return None


def canonical_json(value: object) -> str:
    """JSON determinístico: chaves ordenadas, separadores compactos."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def derive_event_id(
    payload: InboundPayload | Mapping[str, Any],
    hints: PhoneHints | None = None,
) -> str:
    """Usa o id do Argus ou gera um hash estável do payload.

    Args:
        payload: Payload resolvido (ou dict já decodificado)
        hints: Dicas de telefone do transporte; entram no hash quando existem

    Returns:
        Id externo do evento (verbatim ou `argus:<hex>`)
    """
    if isinstance(payload, Mapping):
        payload = StructuredPayload(dict(payload))

    caller_id = _caller_id(payload.fields)
    if caller_id is not None:
        return caller_id

    material: object = payload.as_stored()
    hint_values = hints.as_dict() if hints is not None else {}
    if hint_values:
        material = {"payload": material, "hints": hint_values}

    digest = hashlib.sha256(canonical_json(material).encode("utf-8")).hexdigest()
    return f"{EVENT_ID_PREFIX}:{digest[:DIGEST_HEX_LENGTH]}"
