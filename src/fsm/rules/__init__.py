"""
Exports públicos do módulo fsm/rules.

Guards de transição e de reentrega.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_redelivery,
    guard_terminal_state,
    guard_valid_state,
)

__all__ = [
    "DEFAULT_GUARDS",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_redelivery",
    "guard_terminal_state",
    "guard_valid_state",
]
