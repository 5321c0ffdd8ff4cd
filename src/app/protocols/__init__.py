"""Protocolos e contratos do core da aplicação."""

from .call_dispatcher import CallDispatcherProtocol, CallRequest
from .event_store import EventStoreProtocol

__all__ = [
    "CallDispatcherProtocol",
    "CallRequest",
    "EventStoreProtocol",
]
