"""Settings da API de chamadas Vapi."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

VAPI_API_BASE_URL: str = "https://api.vapi.ai"


@dataclass(frozen=True)
class VapiSettings:
    """Configurações do dispatcher de chamadas.

    Attributes:
        api_key: Bearer token privado da Vapi
        assistant_id: Assistente que conduz a chamada
        phone_number_id: Número de origem cadastrado na Vapi
        api_base_url: URL base da API
        request_timeout_seconds: Timeout por requisição
        max_retries: Retentativas em 429/5xx (0 por padrão: iniciar chamada não é idempotente)
    """

    api_key: str = ""
    assistant_id: str = ""
    phone_number_id: str = ""
    api_base_url: str = VAPI_API_BASE_URL
    request_timeout_seconds: float = 15.0
    max_retries: int = 0

    @property
    def call_endpoint(self) -> str:
        """URL de criação de chamadas."""
        return f"{self.api_base_url.rstrip('/')}/call"

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Vapi.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_key:
            errors.append("VAPI_API_KEY não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("VAPI_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("VAPI_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> VapiSettings:
    """Carrega VapiSettings a partir de variáveis de ambiente."""
    return VapiSettings(
        api_key=os.getenv("VAPI_API_KEY", ""),
        assistant_id=os.getenv("VAPI_ASSISTANT_ID", ""),
        phone_number_id=os.getenv("VAPI_PHONE_NUMBER_ID", ""),
        api_base_url=os.getenv("VAPI_API_BASE_URL", VAPI_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("VAPI_REQUEST_TIMEOUT_SECONDS", "15")),
        max_retries=int(os.getenv("VAPI_MAX_RETRIES", "0")),
    )


@lru_cache(maxsize=1)
def get_vapi_settings() -> VapiSettings:
    """Retorna instância cacheada de VapiSettings."""
    return _load_from_env()
