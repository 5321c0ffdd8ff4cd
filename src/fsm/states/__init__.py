"""
Exports públicos do módulo fsm/states.

Status canônicos de um evento no log de eventos.
"""

from fsm.states.event import (
    DEFAULT_INITIAL_STATE,
    REDELIVERABLE_STATES,
    TERMINAL_STATES,
    EventStatus,
    is_terminal,
    is_valid_state,
    parse_status,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "REDELIVERABLE_STATES",
    "TERMINAL_STATES",
    "EventStatus",
    "is_terminal",
    "is_valid_state",
    "parse_status",
]
