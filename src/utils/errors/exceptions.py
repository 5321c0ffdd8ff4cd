"""Exceções de domínio para falhas recuperáveis de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class EventStoreError(InfrastructureError):
    """Falha ao gravar ou ler o log de eventos (Supabase/PostgREST)."""


class CallDispatchError(InfrastructureError):
    """Falha ao iniciar chamada na API de voz (Vapi).

    Attributes:
        status_code: Status HTTP retornado (None em erro de transporte)
        detail: Corpo/motivo retornado pela API, já truncado
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
