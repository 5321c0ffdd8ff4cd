"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
    parse_bool,
)
from config.settings.base.event_store import (
    EventStoreBackend,
    EventStoreSettings,
    get_event_store_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    "Environment",
    # Event store
    "EventStoreBackend",
    "EventStoreSettings",
    "get_base_settings",
    "get_event_store_settings",
    "parse_bool",
]
