"""Registro persistido de um evento Argus (uma linha por external_id)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - usado em runtime nos dataclasses
from typing import Any

from fsm.states.event import EventStatus


@dataclass(frozen=True, slots=True)
class EventRecord:
    """Linha do log de eventos.

    `external_id` é a chave de idempotência; gravações posteriores para a
    mesma chave são merges/patches, nunca linhas novas.
    """

    external_id: str
    event_type: str = "unknown"
    payload: dict[str, Any] = field(default_factory=dict)
    status: EventStatus = EventStatus.RECEIVED
    call_reference: str | None = None
    error: str | None = None
    processed_at: datetime | None = None
