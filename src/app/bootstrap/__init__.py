"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_relay_use_case

    # Na inicialização do serviço
    initialize_app()

    # Obter o use case (singleton)
    use_case = get_relay_use_case()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_argus_settings,
    get_base_settings,
    get_event_store_settings,
    get_supabase_settings,
    get_vapi_settings,
)

if TYPE_CHECKING:
    from app.protocols import CallDispatcherProtocol, EventStoreProtocol
    from app.use_cases.argus import RelayCallEventUseCase

# Nome do serviço para logs e métricas
SERVICE_NAME = "argus_relay"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação. Deve ser chamada uma vez no início do serviço.

    Configura logging estruturado JSON com correlation_id (nível via LOG_LEVEL).
    """
    configure_logging(
        level=get_base_settings().log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de validação de todas as settings, prefixados por componente."""
    base = get_base_settings()
    event_store = get_event_store_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"event_store: {error}" for error in event_store.validate(base))
    if event_store.backend == "supabase":
        errors.extend(f"supabase: {error}" for error in get_supabase_settings().validate())
    errors.extend(f"vapi: {error}" for error in get_vapi_settings().validate())
    errors.extend(f"argus: {error}" for error in get_argus_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development`/`test` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = base.is_strict
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_event_store() -> EventStoreProtocol:
    """Obtém o log de eventos (singleton)."""
    from app.bootstrap.dependencies import create_event_store

    return create_event_store()


@lru_cache(maxsize=1)
def get_call_dispatcher() -> CallDispatcherProtocol:
    """Obtém o dispatcher de chamadas (singleton)."""
    from app.bootstrap.dependencies import create_call_dispatcher

    return create_call_dispatcher()


@lru_cache(maxsize=1)
def get_relay_use_case() -> RelayCallEventUseCase:
    """Obtém o use case do relay (singleton)."""
    from app.bootstrap.dependencies import create_relay_use_case

    return create_relay_use_case(get_event_store(), get_call_dispatcher())
