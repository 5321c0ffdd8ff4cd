"""
Guards para transições de status e para reentregas.

Além do grafo de transições, dois controles protegem o ciclo de vida:
- dentro de uma invocação, desfechos não podem ser reescritos;
- entre invocações, uma reentrega de evento já encaminhado à Vapi não
  pode disparar outra chamada.
"""

from collections.abc import Callable

from fsm.states.event import (
    REDELIVERABLE_STATES,
    TERMINAL_STATES,
    EventStatus,
    is_valid_state,
)


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a operação é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[EventStatus, EventStatus], GuardResult]


def guard_valid_state(
    from_state: EventStatus,
    to_state: EventStatus,
) -> GuardResult:
    """Guard: ambos os status precisam ser EventStatus."""
    if not is_valid_state(from_state):
        return GuardResult.deny(f"Status de origem inválido: {from_state}")

    if not is_valid_state(to_state):
        return GuardResult.deny(f"Status de destino inválido: {to_state}")

    return GuardResult.allow()


def guard_terminal_state(
    from_state: EventStatus,
    to_state: EventStatus,
) -> GuardResult:
    """Guard: desfecho já registrado nesta invocação não muda."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Status {from_state.value} é terminal, não permite transição"
        )
    return GuardResult.allow()


DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
]


def evaluate_guards(
    from_state: EventStatus,
    to_state: EventStatus,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia os guards em ordem.

    Returns:
        GuardResult do primeiro guard que negar, ou allow()
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result

    return GuardResult.allow()


def guard_redelivery(existing_status: EventStatus | None) -> GuardResult:
    """
    Guard: decide se uma reentrega pode ser reprocessada.

    Args:
        existing_status: Status já gravado para a chave (None se novo)

    Returns:
        deny() quando a chamada já foi encaminhada à Vapi
    """
    if existing_status is None or existing_status in REDELIVERABLE_STATES:
        return GuardResult.allow()
    return GuardResult.deny(
        f"Evento já em {existing_status.value}; reentrega ignorada"
    )
