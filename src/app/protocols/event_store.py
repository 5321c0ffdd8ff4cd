"""Protocolo do log de eventos (colaborador externo).

Implementações devem fazer insert-or-merge atômico por `external_id`
(constraint UNIQUE + resolução de conflito), para que reentregas
concorrentes nunca criem linhas duplicadas.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain.event_record import EventRecord


class EventStoreProtocol(ABC):
    """Contrato assíncrono do log de eventos.

    Campos aceitos em `patch`: status, call_reference, error, processed_at.
    Toda falha de IO deve ser levantada como `EventStoreError`.
    """

    @abstractmethod
    async def insert_or_merge(self, record: EventRecord) -> None:
        """Cria a linha ou faz merge (last-write-wins) na existente."""

    @abstractmethod
    async def patch(self, external_id: str, fields: Mapping[str, Any]) -> None:
        """Aplica atualização parcial na linha existente."""

    @abstractmethod
    async def fetch(self, external_id: str) -> EventRecord | None:
        """Lê a linha atual (None se a chave nunca foi vista)."""
