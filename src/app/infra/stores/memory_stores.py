"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from app.domain.event_record import EventRecord
from app.protocols.event_store import EventStoreProtocol
from fsm.states.event import parse_status

if TYPE_CHECKING:
    from collections.abc import Mapping

PATCHABLE_FIELDS = frozenset({"status", "call_reference", "error", "processed_at"})


class MemoryEventStore(EventStoreProtocol):
    """Log de eventos em memória com a mesma semântica do Supabase.

    - insert_or_merge: cria ou sobrescreve os campos enviados
    - patch: no-op quando a chave não existe (PATCH sem linhas afetadas)
    """

    def __init__(self) -> None:
        self._rows: dict[str, EventRecord] = {}
        self.insert_calls = 0
        self.patch_calls = 0

    async def insert_or_merge(self, record: EventRecord) -> None:
        self.insert_calls += 1
        existing = self._rows.get(record.external_id)
        if existing is None:
            self._rows[record.external_id] = copy.deepcopy(record)
            return

        # merge-duplicates sobrescreve apenas as colunas enviadas
        self._rows[record.external_id] = replace(
            existing,
            event_type=record.event_type,
            payload=copy.deepcopy(record.payload),
            status=record.status,
            call_reference=record.call_reference or existing.call_reference,
            error=record.error if record.error is not None else existing.error,
            processed_at=record.processed_at or existing.processed_at,
        )

    async def patch(self, external_id: str, fields: Mapping[str, Any]) -> None:
        self.patch_calls += 1
        existing = self._rows.get(external_id)
        if existing is None:
            return

        updates = {name: value for name, value in fields.items() if name in PATCHABLE_FIELDS}
        if "status" in updates:
            updates["status"] = parse_status(updates["status"]) or existing.status
        self._rows[external_id] = replace(existing, **updates)

    async def fetch(self, external_id: str) -> EventRecord | None:
        return self._rows.get(external_id)

    def all(self) -> list[EventRecord]:
        """Linhas atuais na ordem de inserção."""
        return list(self._rows.values())
