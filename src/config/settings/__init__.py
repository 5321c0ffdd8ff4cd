"""Agregador de settings do relay Argus → Vapi.

Re-exporta todas as settings e funções de cada módulo.
Organização por componente para isolamento de mudanças.
"""

from __future__ import annotations

# Inbound (Argus)
from config.settings.argus import (
    VALID_PHONE_FORMATS,
    ArgusSettings,
    get_argus_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    EventStoreBackend,
    EventStoreSettings,
    get_base_settings,
    get_event_store_settings,
    parse_bool,
)

# Event store (Supabase)
from config.settings.supabase import (
    SupabaseSettings,
    get_supabase_settings,
)

# Call dispatcher (Vapi)
from config.settings.vapi import (
    VAPI_API_BASE_URL,
    VapiSettings,
    get_vapi_settings,
)

__all__ = [
    # Constants
    "VALID_PHONE_FORMATS",
    "VAPI_API_BASE_URL",
    # Inbound
    "ArgusSettings",
    # Base
    "BaseSettings",
    "Environment",
    "EventStoreBackend",
    "EventStoreSettings",
    # Collaborators
    "SupabaseSettings",
    "VapiSettings",
    "get_argus_settings",
    "get_base_settings",
    "get_event_store_settings",
    "get_supabase_settings",
    "get_vapi_settings",
    "parse_bool",
]
