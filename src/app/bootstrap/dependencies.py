"""Factories de colaboradores: criação de implementações concretas.

Este módulo centraliza a criação do log de eventos, do dispatcher de
chamadas e do use case do relay a partir das settings de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.vapi import create_vapi_http_client
from app.infra.stores import MemoryEventStore, SupabaseEventStore
from app.use_cases.argus import RelayCallEventUseCase, RelayConfig
from config.settings import (
    get_argus_settings,
    get_base_settings,
    get_event_store_settings,
    get_supabase_settings,
    get_vapi_settings,
)

if TYPE_CHECKING:
    from app.protocols import CallDispatcherProtocol, EventStoreProtocol

logger = logging.getLogger(__name__)


def create_event_store() -> EventStoreProtocol:
    """Cria o log de eventos baseado na configuração.

    Lê EVENT_STORE_BACKEND da env:
    - "memory": MemoryEventStore (dev only)
    - "supabase": SupabaseEventStore (staging/production)

    Returns:
        Implementação de EventStoreProtocol
    """
    backend = get_event_store_settings().backend

    if backend == "supabase":
        store = SupabaseEventStore(get_supabase_settings())
        logger.info("event_store_created", extra={"backend": "supabase"})
        return store

    if backend == "memory":
        base = get_base_settings()
        if not base.is_development:
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        logger.info("event_store_created", extra={"backend": "memory"})
        return MemoryEventStore()

    msg = f"EVENT_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_call_dispatcher() -> CallDispatcherProtocol:
    """Cria o dispatcher de chamadas (Vapi)."""
    dispatcher = create_vapi_http_client(get_vapi_settings())
    logger.info("call_dispatcher_created", extra={"backend": "vapi"})
    return dispatcher


def create_relay_config() -> RelayConfig:
    """Monta a configuração explícita do relay a partir das settings."""
    return RelayConfig.from_settings(get_argus_settings(), get_vapi_settings())


def create_relay_use_case(
    store: EventStoreProtocol | None = None,
    dispatcher: CallDispatcherProtocol | None = None,
) -> RelayCallEventUseCase:
    """Cria o use case do relay com colaboradores injetáveis."""
    return RelayCallEventUseCase(
        store=store if store is not None else create_event_store(),
        dispatcher=dispatcher if dispatcher is not None else create_call_dispatcher(),
        config=create_relay_config(),
    )
