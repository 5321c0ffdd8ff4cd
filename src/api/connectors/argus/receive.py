"""Parse tolerante do corpo do webhook Argus (sem PII)."""

from __future__ import annotations

import json
import logging

from app.domain.payload import InboundPayload, RawTextPayload, StructuredPayload
from config.logging import log_fallback

logger = logging.getLogger(__name__)

PARSER_COMPONENT = "argus_body_parser"


def decode_body(raw_body: bytes) -> str:
    """Decodifica o corpo como UTF-8, substituindo bytes inválidos."""
    return raw_body.decode("utf-8", errors="replace")


def parse_inbound_body(raw_body: bytes) -> InboundPayload:
    """Resolve o corpo em `StructuredPayload` ou `RawTextPayload`.

    Aceita JSON direto e JSON serializado dentro de uma string JSON
    (o Argus às vezes envia `"{\\"id\\": ...}"`). Qualquer outra coisa
    degrada para texto bruto, que ainda passa pela busca de telefone.

    Args:
        raw_body: Corpo bruto do request

    Returns:
        Payload resolvido; nunca levanta
    """
    if not raw_body or not raw_body.strip():
        return StructuredPayload({})

    text = decode_body(raw_body)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        log_fallback(logger, PARSER_COMPONENT, reason="invalid_json")
        return RawTextPayload(text)

    if isinstance(decoded, str):
        try:
            decoded = json.loads(decoded)
        except json.JSONDecodeError:
            log_fallback(logger, PARSER_COMPONENT, reason="json_string_not_json")
            return RawTextPayload(text)

    if isinstance(decoded, (dict, list)):
        return StructuredPayload(decoded)

    log_fallback(logger, PARSER_COMPONENT, reason="json_not_container")
    return RawTextPayload(text)
