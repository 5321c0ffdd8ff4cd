"""Use cases do relay Argus → Vapi."""

from .models import InboundRequest, RelayConfig, RelayOutcome, RelayResult
from .relay_call_event import RelayCallEventUseCase

__all__ = [
    "InboundRequest",
    "RelayCallEventUseCase",
    "RelayConfig",
    "RelayOutcome",
    "RelayResult",
]
