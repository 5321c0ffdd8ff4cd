"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    CallDispatchError,
    EventStoreError,
    InfrastructureError,
)

__all__ = [
    "CallDispatchError",
    "EventStoreError",
    "InfrastructureError",
]
