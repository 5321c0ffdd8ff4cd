"""Connector outbound da Vapi (API de chamadas de voz)."""

from api.connectors.vapi.http_client import VapiHttpClient, create_vapi_http_client
from api.connectors.vapi.models import VapiCallRequest, VapiCallResponse

__all__ = [
    "VapiCallRequest",
    "VapiCallResponse",
    "VapiHttpClient",
    "create_vapi_http_client",
]
