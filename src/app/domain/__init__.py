"""Modelos de domínio do relay (telefone, payload, registro de evento)."""

from app.domain.event_record import EventRecord
from app.domain.payload import InboundPayload, RawTextPayload, StructuredPayload
from app.domain.phone import PhoneFormat, format_phone, looks_like_phone, normalize_phone

__all__ = [
    "EventRecord",
    "InboundPayload",
    "PhoneFormat",
    "RawTextPayload",
    "StructuredPayload",
    "format_phone",
    "looks_like_phone",
    "normalize_phone",
]
