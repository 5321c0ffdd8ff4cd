"""Fakes de colaboradores do relay para testes deterministas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.infra.stores.memory_stores import MemoryEventStore
from utils.errors import CallDispatchError, EventStoreError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.event_record import EventRecord
    from app.protocols.call_dispatcher import CallRequest


class FakeCallDispatcher:
    """Registra pedidos de chamada sem IO.

    Com `error` configurado, toda chamada levanta CallDispatchError.
    """

    def __init__(
        self,
        call_id: str | None = "call-123",
        error: CallDispatchError | None = None,
    ) -> None:
        self._call_id = call_id
        self._error = error
        self.requests: list[CallRequest] = []

    async def start_call(self, request: CallRequest) -> str | None:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._call_id


class FailingEventStore(MemoryEventStore):
    """Store em memória que falha nas operações indicadas."""

    def __init__(self, *, fail_on: set[str]) -> None:
        super().__init__()
        self._fail_on = fail_on

    async def insert_or_merge(self, record: EventRecord) -> None:
        if "insert_or_merge" in self._fail_on:
            raise EventStoreError("supabase_upsert_failed")
        await super().insert_or_merge(record)

    async def patch(self, external_id: str, fields: Mapping[str, Any]) -> None:
        if "patch" in self._fail_on:
            raise EventStoreError("supabase_patch_failed")
        await super().patch(external_id, fields)

    async def fetch(self, external_id: str) -> EventRecord | None:
        if "fetch" in self._fail_on:
            raise EventStoreError("supabase_fetch_failed")
        return await super().fetch(external_id)
