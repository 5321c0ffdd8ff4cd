"""
Exports públicos do módulo fsm/manager.

Máquina de estados do ciclo de vida de um evento.
"""

from fsm.manager.machine import (
    EventLifecycle,
    create_lifecycle,
)

__all__ = [
    "EventLifecycle",
    "create_lifecycle",
]
