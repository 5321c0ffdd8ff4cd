"""Cliente HTTP da Vapi para início de chamadas de saída.

Estende HttpClient genérico com:
- Autenticação Bearer com a chave privada da Vapi
- Conversão de status não-2xx e falhas de transporte em CallDispatchError
- Logging estruturado sem PII (destino sempre mascarado)

Iniciar chamada não é idempotente: o padrão é não repetir (max_retries=0).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from api.connectors.vapi.models import VapiCallRequest, VapiCallResponse, VapiCustomer
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from utils.errors import CallDispatchError
from utils.sanitizer import mask_phone

if TYPE_CHECKING:
    import httpx

    from app.protocols.call_dispatcher import CallRequest
    from config.settings import VapiSettings

logger: logging.Logger = logging.getLogger(__name__)

ERROR_BODY_MAX_CHARS = 500


class VapiHttpClient(HttpClient):
    """Dispatcher de chamadas sobre a REST API da Vapi."""

    def __init__(
        self,
        api_key: str,
        call_endpoint: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config or HttpClientConfig(max_retries=0), transport=transport)
        self._api_key = api_key
        self._call_endpoint = call_endpoint

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    async def start_call(self, request: CallRequest) -> str | None:
        """Inicia a chamada e devolve o id retornado pela Vapi.

        Raises:
            CallDispatchError: Status não-2xx ou falha de transporte
        """
        if not self._api_key or not self._api_key.strip():
            raise CallDispatchError("Vapi api key não configurada")

        body = VapiCallRequest(
            assistant_id=request.assistant_id or None,
            phone_number_id=request.origin or None,
            customer=VapiCustomer(number=request.destination),
            metadata=dict(request.metadata),
        ).to_wire()

        try:
            response = await self.post(self._call_endpoint, json=body, headers=self._headers())
        except HttpError as exc:
            logger.warning(
                "vapi_request_failed",
                extra={
                    "destination": mask_phone(request.destination),
                    "status_code": exc.status_code,
                    "error_type": type(exc).__name__,
                },
            )
            if exc.status_code is not None:
                raise CallDispatchError(
                    f"Vapi {exc.status_code}: {exc.detail}",
                    status_code=exc.status_code,
                    detail=exc.detail,
                ) from exc
            raise CallDispatchError(f"Vapi transport error: {exc}") from exc

        if not response.is_success:
            detail = response.text[:ERROR_BODY_MAX_CHARS]
            logger.warning(
                "vapi_call_rejected",
                extra={
                    "destination": mask_phone(request.destination),
                    "status_code": response.status_code,
                },
            )
            raise CallDispatchError(
                f"Vapi {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        return self._call_id(response)

    def _call_id(self, response: httpx.Response) -> str | None:
        try:
            parsed = VapiCallResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            # 2xx sem corpo utilizável: chamada criada, referência desconhecida
            logger.warning("vapi_response_unparsable", extra={"status_code": response.status_code})
            return None

        logger.debug(
            "vapi_call_started",
            extra={"status_code": response.status_code, "call_status": parsed.status},
        )
        return parsed.id


def create_vapi_http_client(
    settings: VapiSettings | None = None,
) -> VapiHttpClient:
    """Factory para criar cliente Vapi com config padrão.

    Args:
        settings: VapiSettings opcional. Se None, carrega do ambiente.

    Returns:
        Cliente configurado para a Vapi.
    """
    # Import local para evitar dependência circular
    from config.settings import get_vapi_settings

    vapi = settings or get_vapi_settings()
    config = HttpClientConfig(
        timeout_seconds=vapi.request_timeout_seconds,
        max_retries=vapi.max_retries,
    )
    return VapiHttpClient(
        api_key=vapi.api_key,
        call_endpoint=vapi.call_endpoint,
        config=config,
    )
