"""Testes do correlation id por request."""

from __future__ import annotations

from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)


def test_set_and_reset() -> None:
    token = set_correlation_id("corr-1")
    try:
        assert get_correlation_id() == "corr-1"
    finally:
        reset_correlation_id(token)

    assert get_correlation_id() == ""


def test_generates_uuid_when_missing() -> None:
    token = set_correlation_id(None)
    try:
        assert len(get_correlation_id()) == 36
    finally:
        reset_correlation_id(token)


def test_from_headers_ignores_blank() -> None:
    assert correlation_id_from_headers({"x-correlation-id": " abc "}) == "abc"
    assert correlation_id_from_headers({"x-correlation-id": "  "}) is None
    assert correlation_id_from_headers({}) is None
