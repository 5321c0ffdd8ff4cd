"""Settings do webhook de entrada Argus.

Credencial compartilhada, modo dry-run e formatação do número de saída.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.core import parse_bool

DEFAULT_SECRET_HEADER = "x-argus-secret"
DEFAULT_PHONE_HEADER = "x-argus-phone"
VALID_PHONE_FORMATS = ("international", "national", "digits")


@dataclass(frozen=True)
class ArgusSettings:
    """Configurações do webhook Argus.

    Attributes:
        webhook_secret: Secret compartilhado (vazio desativa a autenticação)
        secret_header: Header dedicado que carrega o secret
        phone_header: Header opcional com telefone de destino
        dry_run: Grava o evento como `queued` sem chamar a Vapi
        strict_errors: Responde 500/502 em falhas transitórias (habilita retry do Argus)
        phone_format: Formato do número enviado à Vapi (international|national|digits)
    """

    webhook_secret: str = ""
    secret_header: str = DEFAULT_SECRET_HEADER
    phone_header: str = DEFAULT_PHONE_HEADER
    dry_run: bool = False
    strict_errors: bool = False
    phone_format: str = "international"

    @property
    def auth_enabled(self) -> bool:
        """Retorna True se o secret está configurado."""
        return bool(self.webhook_secret)

    def validate(self) -> list[str]:
        """Valida configurações do webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.phone_format not in VALID_PHONE_FORMATS:
            errors.append(
                f"ARGUS_PHONE_FORMAT inválido: {self.phone_format} "
                f"(válidos: {', '.join(VALID_PHONE_FORMATS)})"
            )

        if not self.secret_header:
            errors.append("ARGUS_SECRET_HEADER não pode ser vazio")

        return errors


def _load_from_env() -> ArgusSettings:
    """Carrega ArgusSettings a partir de variáveis de ambiente."""
    return ArgusSettings(
        webhook_secret=os.getenv("ARGUS_WEBHOOK_SECRET", ""),
        secret_header=os.getenv("ARGUS_SECRET_HEADER", DEFAULT_SECRET_HEADER).lower(),
        phone_header=os.getenv("ARGUS_PHONE_HEADER", DEFAULT_PHONE_HEADER).lower(),
        dry_run=parse_bool(os.getenv("ARGUS_DRY_RUN")),
        strict_errors=parse_bool(os.getenv("ARGUS_STRICT_ERRORS")),
        phone_format=os.getenv("ARGUS_PHONE_FORMAT", "international").strip().lower(),
    )


@lru_cache(maxsize=1)
def get_argus_settings() -> ArgusSettings:
    """Retorna instância cacheada de ArgusSettings."""
    return _load_from_env()
