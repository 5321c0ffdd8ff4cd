"""Settings do Supabase (PostgREST) usado como log de eventos."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_EVENTS_TABLE = "argus_events"


@dataclass(frozen=True)
class SupabaseSettings:
    """Configurações do log de eventos no Supabase.

    Attributes:
        url: URL do projeto Supabase
        service_role_key: Chave service role (bypassa RLS; nunca logar)
        events_table: Tabela com UNIQUE(external_id)
        request_timeout_seconds: Timeout por requisição
        max_retries: Retentativas em 429/5xx (upsert e patch são idempotentes)
    """

    url: str = ""
    service_role_key: str = ""
    events_table: str = DEFAULT_EVENTS_TABLE
    request_timeout_seconds: float = 10.0
    max_retries: int = 2

    @property
    def table_endpoint(self) -> str:
        """URL REST da tabela de eventos."""
        return f"{self.url.rstrip('/')}/rest/v1/{self.events_table}"

    def validate(self) -> list[str]:
        """Valida configurações do Supabase.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.url:
            errors.append("SUPABASE_URL não configurado")

        if not self.service_role_key:
            errors.append("SUPABASE_SERVICE_ROLE_KEY não configurado")

        if not self.events_table:
            errors.append("SUPABASE_EVENTS_TABLE não pode ser vazio")

        if self.max_retries < 0:
            errors.append("SUPABASE_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> SupabaseSettings:
    """Carrega SupabaseSettings a partir de variáveis de ambiente."""
    return SupabaseSettings(
        url=os.getenv("SUPABASE_URL", os.getenv("NEXT_PUBLIC_SUPABASE_URL", "")),
        service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""),
        events_table=os.getenv("SUPABASE_EVENTS_TABLE", DEFAULT_EVENTS_TABLE),
        request_timeout_seconds=float(os.getenv("SUPABASE_REQUEST_TIMEOUT_SECONDS", "10")),
        max_retries=int(os.getenv("SUPABASE_MAX_RETRIES", "2")),
    )


@lru_cache(maxsize=1)
def get_supabase_settings() -> SupabaseSettings:
    """Retorna instância cacheada de SupabaseSettings."""
    return _load_from_env()
