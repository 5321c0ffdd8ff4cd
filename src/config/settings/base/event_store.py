"""Settings do log de eventos (idempotência por external_id)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

EventStoreBackend = Literal["memory", "supabase"]

VALID_EVENT_STORE_BACKENDS = frozenset({"memory", "supabase"})


@dataclass(frozen=True)
class EventStoreSettings:
    """Configurações do backend do log de eventos.

    Attributes:
        backend: Backend de persistência (memory|supabase)
    """

    backend: str = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do event store.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.backend not in VALID_EVENT_STORE_BACKENDS:
            errors.append(f"EVENT_STORE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "EVENT_STORE_BACKEND=memory proibido em staging/production. "
                "Use supabase."
            )

        return errors


def _load_event_store_from_env() -> EventStoreSettings:
    """Carrega EventStoreSettings de variáveis de ambiente.

    Sem backend explícito, usa supabase quando a URL estiver configurada.
    """
    has_supabase = bool(os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL"))
    default_backend = "supabase" if has_supabase else "memory"
    return EventStoreSettings(
        backend=os.getenv("EVENT_STORE_BACKEND", default_backend).strip().lower(),
    )


@lru_cache(maxsize=1)
def get_event_store_settings() -> EventStoreSettings:
    """Retorna instância cacheada de EventStoreSettings."""
    return _load_event_store_from_env()
