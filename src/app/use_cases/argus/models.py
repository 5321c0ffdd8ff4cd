"""Contratos de entrada/saída do relay Argus → Vapi."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003 - usado em runtime nos dataclasses
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from app.domain.phone import PhoneFormat

if TYPE_CHECKING:
    from config.settings import ArgusSettings, VapiSettings


class RelayOutcome(StrEnum):
    """Desfecho devolvido ao Argus no corpo da resposta."""

    FORWARDED = "forwarded_to_call_api"
    QUEUED = "queued"
    INVALID_PHONE = "invalid_phone"
    CALL_API_ERROR = "call_api_error"
    DUPLICATE = "duplicate"
    ACCEPTED = "accepted"
    STORE_ERROR = "store_error"
    UNAUTHORIZED = "unauthorized"
    METHOD_NOT_ALLOWED = "method_not_allowed"


@dataclass(frozen=True, slots=True)
class InboundRequest:
    """Request HTTP já desacoplado do framework.

    Attributes:
        method: Método HTTP
        path: Path completo (pode terminar com o telefone)
        headers: Headers com chaves em minúsculas
        query_params: Parâmetros da query string
        body: Corpo bruto
        received_at: Momento do recebimento (UTC)
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    received_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class RelayConfig:
    """Configuração explícita do relay (nunca lida do ambiente pelo use case)."""

    webhook_secret: str = ""
    secret_header: str = "x-argus-secret"
    phone_header: str = "x-argus-phone"
    dry_run: bool = False
    strict_errors: bool = False
    phone_format: PhoneFormat = PhoneFormat.INTERNATIONAL
    assistant_id: str | None = None
    phone_number_id: str | None = None

    @classmethod
    def from_settings(cls, argus: ArgusSettings, vapi: VapiSettings) -> RelayConfig:
        return cls(
            webhook_secret=argus.webhook_secret,
            secret_header=argus.secret_header,
            phone_header=argus.phone_header,
            dry_run=argus.dry_run,
            strict_errors=argus.strict_errors,
            phone_format=PhoneFormat(argus.phone_format),
            assistant_id=vapi.assistant_id or None,
            phone_number_id=vapi.phone_number_id or None,
        )


@dataclass(frozen=True, slots=True)
class RelayResult:
    """Resultado do processamento, renderizado pela rota."""

    http_status: int
    outcome: RelayOutcome
    event_id: str | None = None
    call_reference: str | None = None
    error: str | None = None
    phone_source: str | None = None

    @property
    def is_plain_text(self) -> bool:
        """401/405 respondem texto puro, sem corpo JSON."""
        return self.outcome in (RelayOutcome.UNAUTHORIZED, RelayOutcome.METHOD_NOT_ALLOWED)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"status": self.outcome.value}
        if self.event_id is not None:
            body["event_id"] = self.event_id
        if self.call_reference is not None:
            body["call_id"] = self.call_reference
        if self.error is not None:
            body["error"] = self.error
        if self.phone_source is not None:
            body["phone_source"] = self.phone_source
        return body
