"""
Exports públicos do módulo fsm/types.

Tipos para registrar transições de status.
"""

from fsm.types.transition import StateTransition, TransitionResult

__all__ = [
    "StateTransition",
    "TransitionResult",
]
