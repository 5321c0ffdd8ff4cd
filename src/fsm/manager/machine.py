"""
Máquina de estados do ciclo de vida de um evento (uma invocação).

O use case cria uma EventLifecycle após gravar RECEIVED e pede a
transição para o desfecho antes de gravar o patch correspondente; uma
transição recusada indica erro de programação, não de entrada.
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.event import (
    DEFAULT_INITIAL_STATE,
    EventStatus,
    is_terminal,
)
from fsm.transitions.rules import is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class EventLifecycle:
    """
    Ciclo de vida de um evento durante uma invocação do webhook.

    Attributes:
        current_state: Status atual
        history: Transições realizadas nesta invocação
    """

    __slots__ = ("_current_state", "_event_id", "_history")

    def __init__(
        self,
        event_id: str,
        initial_state: EventStatus | None = None,
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._event_id = event_id

    @property
    def current_state(self) -> EventStatus:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def event_id(self) -> str:
        return self._event_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def transition(
        self,
        target: EventStatus,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta mover o evento para `target`.

        Args:
            target: Status de destino
            trigger: Gatilho (ex: 'call_dispatched')
            metadata: Dados para auditoria (sem PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.value} → {target.value}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)


def create_lifecycle(
    event_id: str,
    initial_state: EventStatus | None = None,
) -> EventLifecycle:
    """Factory de EventLifecycle."""
    return EventLifecycle(event_id=event_id, initial_state=initial_state)
