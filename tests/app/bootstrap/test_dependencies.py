"""Testes do composition root (factories e validação de startup)."""

from __future__ import annotations

import pytest

from api.connectors.vapi import VapiHttpClient
from app.bootstrap import collect_settings_errors, validate_runtime_settings
from app.bootstrap.dependencies import (
    create_call_dispatcher,
    create_event_store,
    create_relay_config,
    create_relay_use_case,
)
from app.infra.stores import MemoryEventStore, SupabaseEventStore
from app.use_cases.argus import RelayCallEventUseCase
from config.settings import (
    get_argus_settings,
    get_base_settings,
    get_event_store_settings,
    get_supabase_settings,
    get_vapi_settings,
)
from tests.fakes.fake_call_dispatcher import FakeCallDispatcher

_ENV_VARS = (
    "ENVIRONMENT",
    "EVENT_STORE_BACKEND",
    "SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "VAPI_API_KEY",
    "VAPI_ASSISTANT_ID",
    "ARGUS_WEBHOOK_SECRET",
    "ARGUS_DRY_RUN",
    "ARGUS_PHONE_FORMAT",
)


def _clear_settings_caches() -> None:
    for getter in (
        get_argus_settings,
        get_base_settings,
        get_event_store_settings,
        get_supabase_settings,
        get_vapi_settings,
    ):
        getter.cache_clear()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_settings_caches()
    yield
    _clear_settings_caches()


def test_memory_store_by_default() -> None:
    assert isinstance(create_event_store(), MemoryEventStore)


def test_supabase_store_when_url_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")

    assert isinstance(create_event_store(), SupabaseEventStore)


def test_invalid_backend_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVENT_STORE_BACKEND", "postgres")

    with pytest.raises(ValueError, match="EVENT_STORE_BACKEND"):
        create_event_store()


def test_call_dispatcher_is_vapi_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAPI_API_KEY", "vapi-key")

    assert isinstance(create_call_dispatcher(), VapiHttpClient)


def test_relay_config_reflects_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARGUS_DRY_RUN", "true")
    monkeypatch.setenv("ARGUS_PHONE_FORMAT", "digits")
    monkeypatch.setenv("VAPI_ASSISTANT_ID", "asst-1")

    config = create_relay_config()

    assert config.dry_run is True
    assert config.phone_format == "digits"
    assert config.assistant_id == "asst-1"


def test_relay_use_case_accepts_injected_collaborators() -> None:
    use_case = create_relay_use_case(MemoryEventStore(), FakeCallDispatcher())

    assert isinstance(use_case, RelayCallEventUseCase)


def test_collect_settings_errors_lists_missing_vapi_key() -> None:
    errors = collect_settings_errors()

    assert "vapi: VAPI_API_KEY não configurado" in errors


def test_validate_runtime_settings_only_warns_in_development() -> None:
    validate_runtime_settings()


def test_validate_runtime_settings_fails_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(RuntimeError, match="Configuração inválida para production"):
        validate_runtime_settings()
