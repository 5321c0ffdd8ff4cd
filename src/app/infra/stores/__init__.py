"""Stores: implementações concretas do log de eventos.

Módulos disponíveis:
    - supabase_event_store: Log de eventos no Supabase (PostgREST)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryEventStore
from app.infra.stores.supabase_event_store import SupabaseEventStore

__all__ = [
    # Memory (dev/test)
    "MemoryEventStore",
    # Supabase (PostgREST)
    "SupabaseEventStore",
]
