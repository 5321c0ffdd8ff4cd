"""Testes do logging estruturado do relay.

Cobre: configure_logging, log_fallback, CorrelationIdFilter e o formato
JSON emitido (campos obrigatórios renomeados).
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME


def _record(msg: str = "argus_event_received", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.use_cases.argus.relay_call_event",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_sets_level_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_handlers_with_single_json_handler(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(service_name="argus_relay_test")

        [handler] = root.handlers
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_http_client_loggers_are_quieted(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_default_service_name(self) -> None:
        assert DEFAULT_SERVICE_NAME == "argus_relay"

    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("app.services.phone_locator").name == "app.services.phone_locator"


class TestLogFallback:
    """Testes para log_fallback."""

    def test_uses_lazy_template_and_extra(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "argus_body_parser", reason="invalid_json")

        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "argus_body_parser")
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "argus_body_parser",
            "reason": "invalid_json",
        }

    def test_elapsed_ms_is_optional(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "argus_body_parser", elapsed_ms=1.5)

        extra = logger.info.call_args[1]["extra"]
        assert extra["elapsed_ms"] == 1.5
        assert "reason" not in extra


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_injects_getter_value_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("argus_relay", lambda: "corr-1").filter(record) is True
        assert record.correlation_id == "corr-1"
        assert record.service == "argus_relay"

    def test_explicit_correlation_id_wins(self) -> None:
        record = _record(correlation_id="explicit")

        CorrelationIdFilter("argus_relay", lambda: "from-getter").filter(record)

        assert record.correlation_id == "explicit"

    def test_none_correlation_id_falls_back_to_getter(self) -> None:
        record = _record(correlation_id=None)

        CorrelationIdFilter("argus_relay", lambda: "from-getter").filter(record)

        assert record.correlation_id == "from-getter"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()

        CorrelationIdFilter("argus_relay").filter(record)

        assert record.correlation_id == ""


class TestJsonFormatter:
    """Testes do formato JSON emitido."""

    def test_required_fields(self) -> None:
        assert {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        } == REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_output_is_json_with_renamed_fields_and_extras(self) -> None:
        record = _record(correlation_id="corr-9", service="argus_relay", event_id="evt1")

        output = json.loads(create_json_formatter().format(record))

        assert output["level"] == "INFO"
        assert output["logger"] == "app.use_cases.argus.relay_call_event"
        assert output["message"] == "argus_event_received"
        assert output["correlation_id"] == "corr-9"
        assert output["service"] == "argus_relay"
        assert output["event_id"] == "evt1"
        assert "levelname" not in output
