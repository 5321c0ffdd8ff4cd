"""Connector inbound do Argus (discador externo).

Responsabilidades:
- Autenticar o request pelo secret compartilhado
- Resolver o corpo em payload estruturado ou texto bruto
- Derivar a chave de idempotência do evento
- Extrair dicas de telefone do transporte
"""

from api.connectors.argus.auth import (
    AuthResult,
    InvalidCredentialsError,
    WebhookRequestError,
    authenticate_request,
    verify_credentials,
)
from api.connectors.argus.event_id import canonical_json, derive_event_id
from api.connectors.argus.receive import parse_inbound_body
from api.connectors.argus.request_hints import (
    RELAY_KEY,
    build_phone_hints,
    build_request_metadata,
    enrich_payload,
)

__all__ = [
    "RELAY_KEY",
    "AuthResult",
    "InvalidCredentialsError",
    "WebhookRequestError",
    "authenticate_request",
    "build_phone_hints",
    "build_request_metadata",
    "canonical_json",
    "derive_event_id",
    "enrich_payload",
    "parse_inbound_body",
    "verify_credentials",
]
