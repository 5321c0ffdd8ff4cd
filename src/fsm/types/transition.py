"""
Tipos para registrar transições de status de um evento.

Metadados de transição vão para logs: nunca incluir telefone em claro
nem secret.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.event import EventStatus


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Registro imutável de uma mudança de status.

    Attributes:
        from_state: Status de origem
        to_state: Status de destino
        trigger: Gatilho da transição (ex: 'dry_run', 'phone_not_found')
        metadata: Dados adicionais para auditoria (sem PII)
        timestamp: Momento da transição (UTC)
    """

    from_state: EventStatus
    to_state: EventStatus
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(UTC)
    )

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs estruturados."""
        return {
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi aplicada
        transition: Dados da transição (se success=True)
        error_reason: Motivo da recusa (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
