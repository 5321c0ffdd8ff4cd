"""Settings base do relay Argus → Vapi.

Ambiente, identificação do serviço e parâmetros do processo (log, porta).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from config.logging.config import VALID_LOG_LEVELS

Environment = Literal["development", "staging", "production"]

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})
STRICT_ENVIRONMENTS = frozenset({"staging", "production"})


@dataclass(frozen=True)
class BaseSettings:
    """Configurações do processo.

    Attributes:
        environment: development|staging|production (`test` conta como development)
        service_name: Nome do serviço nos logs
        log_level: Nível do root logger
        port: Porta HTTP do uvicorn (Cloud Run injeta PORT)
        debug: Modo debug ativo
    """

    environment: Environment = "development"
    service_name: str = "argus-relay"
    log_level: str = "INFO"
    port: int = 8080
    debug: bool = False

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_strict(self) -> bool:
        """Staging/production: configuração inválida impede o boot."""
        return self.environment in STRICT_ENVIRONMENTS

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        if not 0 < self.port < 65536:
            errors.append(f"PORT fora do intervalo: {self.port}")

        return errors


def parse_bool(value: str | None, default: bool = False) -> bool:
    """Converte string de env em bool (true/1/yes/on)."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY_VALUES


def _parse_environment(env_str: str) -> Environment:
    env_lower = env_str.strip().lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "argus-relay"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        port=int(os.getenv("PORT", "8080")),
        debug=parse_bool(os.getenv("DEBUG")),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
