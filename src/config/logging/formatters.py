"""Formatter JSON (python-json-logger) com campos obrigatórios.

Exemplo de output:
    {
        "asctime": "2026-10-17 10:30:00,123",
        "level": "INFO",
        "logger": "app.use_cases.argus.relay_call_event",
        "message": "argus_call_dispatched",
        "correlation_id": "5b0c...",
        "service": "argus_relay",
        "event_id": "argus:9f86d081884c7d65"
    }
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com os campos obrigatórios e nomes padronizados."""
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
