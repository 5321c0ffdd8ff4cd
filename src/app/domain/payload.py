"""Payload de entrada do Argus, resolvido uma única vez na borda.

O corpo do webhook não tem schema fixo: pode ser um objeto JSON, uma
string JSON contendo outro JSON, ou texto arbitrário. A união
``InboundPayload`` separa os dois casos para que o resto do pipeline não
precise reinspecionar o tipo.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

EVENT_TYPE_FIELDS = ("type", "event", "event_type", "eventType")
UNKNOWN_EVENT_TYPE = "unknown"
RAW_TEXT_EVENT_TYPE = "raw_text"


@dataclass(frozen=True, slots=True)
class StructuredPayload:
    """Corpo decodificado como JSON (objeto ou lista)."""

    data: dict[str, Any] | list[Any]

    @property
    def fields(self) -> Mapping[str, Any]:
        """Campos de topo (vazio quando o JSON é uma lista)."""
        return self.data if isinstance(self.data, dict) else {}

    @property
    def event_type(self) -> str:
        for name in EVENT_TYPE_FIELDS:
            value = self.fields.get(name)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return UNKNOWN_EVENT_TYPE

    def as_stored(self) -> dict[str, Any]:
        """Forma persistida verbatim (listas ficam sob ``items``)."""
        if isinstance(self.data, dict):
            return dict(self.data)
        return {"items": list(self.data)}


@dataclass(frozen=True, slots=True)
class RawTextPayload:
    """Corpo que não pôde ser decodificado como JSON estruturado."""

    text: str

    @property
    def fields(self) -> Mapping[str, Any]:
        return {}

    @property
    def event_type(self) -> str:
        return RAW_TEXT_EVENT_TYPE

    def as_stored(self) -> dict[str, Any]:
        return {"raw": self.text}


InboundPayload = StructuredPayload | RawTextPayload
