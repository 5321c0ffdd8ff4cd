"""
Módulo FSM: ciclo de vida de eventos Argus no log de eventos.

Estrutura:
    - states/: Status do evento (EventStatus)
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - rules/: Guards de transição e de reentrega
    - manager/: Máquina por invocação (EventLifecycle)
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import (
    EventLifecycle,
    create_lifecycle,
)
from fsm.rules import (
    GuardResult,
    evaluate_guards,
    guard_redelivery,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    REDELIVERABLE_STATES,
    TERMINAL_STATES,
    EventStatus,
    is_terminal,
    is_valid_state,
    parse_status,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "REDELIVERABLE_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "EventLifecycle",
    "EventStatus",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "create_lifecycle",
    "evaluate_guards",
    "get_valid_targets",
    "guard_redelivery",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "parse_status",
    "validate_transition_map",
]
