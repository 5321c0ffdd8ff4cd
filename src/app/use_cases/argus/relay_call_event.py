"""Use case do relay Argus → Vapi.

Fluxo por entrega:
1. Método e secret (401 antes de qualquer gravação)
2. Parse tolerante do corpo e derivação da chave de idempotência
3. Guarda de reentrega e gravação `received` (insert-or-merge)
4. Dry-run, localização do telefone e início da chamada
5. Patch do desfecho no log de eventos

Falhas de store depois do passo 3 são apenas logadas: o desfecho já foi
decidido e a resposta ao Argus não muda.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from api.connectors.argus.auth import InvalidCredentialsError, verify_credentials
from api.connectors.argus.event_id import derive_event_id
from api.connectors.argus.receive import decode_body, parse_inbound_body
from api.connectors.argus.request_hints import (
    build_phone_hints,
    build_request_metadata,
    enrich_payload,
)
from app.domain.event_record import EventRecord
from app.domain.phone import format_phone
from app.observability import record_dispatch
from app.protocols.call_dispatcher import CallRequest
from app.services.phone_locator import locate_phone
from app.use_cases.argus.models import RelayOutcome, RelayResult
from fsm.manager import EventLifecycle, create_lifecycle
from fsm.rules import guard_redelivery
from fsm.states import EventStatus
from utils.errors import CallDispatchError, EventStoreError
from utils.sanitizer import mask_key, mask_phone

if TYPE_CHECKING:
    from app.domain.payload import InboundPayload
    from app.protocols.call_dispatcher import CallDispatcherProtocol
    from app.protocols.event_store import EventStoreProtocol
    from app.services.phone_locator import PhoneHints
    from app.use_cases.argus.models import InboundRequest, RelayConfig

logger = logging.getLogger(__name__)

CALL_SOURCE = "argus"
PHONE_NOT_FOUND = "phone_not_found"
STORE_UNAVAILABLE = "event_store_unavailable"


class RelayCallEventUseCase:
    """Recebe um evento Argus, grava de forma idempotente e inicia a chamada."""

    def __init__(
        self,
        *,
        store: EventStoreProtocol,
        dispatcher: CallDispatcherProtocol,
        config: RelayConfig,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._config = config

    @property
    def config(self) -> RelayConfig:
        return self._config

    async def execute(self, request: InboundRequest) -> RelayResult:
        """Processa uma entrega do webhook e devolve o desfecho."""
        if request.method.upper() != "POST":
            return RelayResult(405, RelayOutcome.METHOD_NOT_ALLOWED, error="Only POST")

        try:
            auth = verify_credentials(
                request.headers,
                self._config.webhook_secret,
                self._config.secret_header,
            )
        except InvalidCredentialsError as exc:
            logger.warning("argus_auth_failed", extra={"reason": str(exc)})
            return RelayResult(401, RelayOutcome.UNAUTHORIZED, error="Unauthorized")

        payload = parse_inbound_body(request.body)
        hints = build_phone_hints(
            headers=request.headers,
            query_params=request.query_params,
            path=request.path,
            raw_body=decode_body(request.body),
            phone_header=self._config.phone_header,
            auth_phone=auth.phone,
        )
        event_id = derive_event_id(payload, hints)
        stored = enrich_payload(
            payload.as_stored(),
            hints,
            build_request_metadata(
                method=request.method,
                path=request.path,
                headers=request.headers,
                query_params=request.query_params,
                auth_header=auth.header,
                received_at=request.received_at,
            ),
        )

        logger.info(
            "argus_event_received",
            extra={
                "event_id": mask_key(event_id, visible=16),
                "event_type": payload.event_type,
                "payload_kind": type(payload).__name__,
                "auth_skipped": auth.skipped,
            },
        )

        early = await self._record_received(event_id, payload, stored)
        if early is not None:
            return early

        lifecycle = create_lifecycle(event_id)
        if self._config.dry_run:
            await self._finish(lifecycle, EventStatus.QUEUED, "dry_run")
            return RelayResult(200, RelayOutcome.QUEUED, event_id=event_id)

        return await self._dispatch(lifecycle, payload, hints)

    async def _record_received(
        self,
        event_id: str,
        payload: InboundPayload,
        stored: dict[str, Any],
    ) -> RelayResult | None:
        """Aplica a guarda de reentrega e grava `received`.

        Returns:
            RelayResult para encerrar cedo (duplicado ou store indisponível),
            ou None para seguir o fluxo.
        """
        try:
            existing = await self._store.fetch(event_id)
            guard = guard_redelivery(existing.status if existing else None)
            if existing is not None and not guard.allowed:
                logger.info(
                    "argus_event_duplicate",
                    extra={"event_id": mask_key(event_id, visible=16), "reason": guard.reason},
                )
                return RelayResult(
                    200,
                    RelayOutcome.DUPLICATE,
                    event_id=event_id,
                    call_reference=existing.call_reference,
                )

            await self._store.insert_or_merge(
                EventRecord(
                    external_id=event_id,
                    event_type=payload.event_type,
                    payload=stored,
                    status=EventStatus.RECEIVED,
                )
            )
        except EventStoreError as exc:
            logger.error(
                "argus_event_store_failed",
                extra={"event_id": mask_key(event_id, visible=16), "error": str(exc)},
            )
            if self._config.strict_errors:
                return RelayResult(
                    500, RelayOutcome.STORE_ERROR, event_id=event_id, error=STORE_UNAVAILABLE
                )
            return RelayResult(
                202, RelayOutcome.ACCEPTED, event_id=event_id, error=STORE_UNAVAILABLE
            )
        return None

    async def _dispatch(
        self,
        lifecycle: EventLifecycle,
        payload: InboundPayload,
        hints: PhoneHints,
    ) -> RelayResult:
        event_id = lifecycle.event_id
        match = locate_phone(payload, hints)
        if match is None:
            logger.warning(
                "argus_phone_not_found",
                extra={"event_id": mask_key(event_id, visible=16)},
            )
            await self._finish(
                lifecycle, EventStatus.INVALID_PHONE, PHONE_NOT_FOUND, error=PHONE_NOT_FOUND
            )
            return RelayResult(
                200, RelayOutcome.INVALID_PHONE, event_id=event_id, error=PHONE_NOT_FOUND
            )

        logger.info(
            "argus_phone_located",
            extra={
                "event_id": mask_key(event_id, visible=16),
                "phone": mask_phone(match.normalized),
                "source": match.source,
                "candidates": [mask_phone(c.normalized) for c in match.candidates],
                "ambiguous": match.is_ambiguous,
            },
        )

        call_request = CallRequest(
            destination=format_phone(match.normalized, self._config.phone_format),
            origin=self._config.phone_number_id,
            assistant_id=self._config.assistant_id,
            metadata={
                "source": CALL_SOURCE,
                "argusId": event_id,
                "eventType": payload.event_type,
            },
        )

        start = time.perf_counter()
        try:
            call_reference = await self._dispatcher.start_call(call_request)
        except CallDispatchError as exc:
            record_dispatch(False, _elapsed_ms(start), status_code=exc.status_code)
            logger.warning(
                "argus_call_dispatch_failed",
                extra={
                    "event_id": mask_key(event_id, visible=16),
                    "status_code": exc.status_code,
                },
            )
            await self._finish(
                lifecycle, EventStatus.CALL_API_ERROR, "call_api_error", error=str(exc)
            )
            return RelayResult(
                502 if self._config.strict_errors else 200,
                RelayOutcome.CALL_API_ERROR,
                event_id=event_id,
                error=str(exc),
                phone_source=match.source,
            )

        record_dispatch(True, _elapsed_ms(start))
        logger.info(
            "argus_call_dispatched",
            extra={"event_id": mask_key(event_id, visible=16), "call_reference": call_reference},
        )
        await self._finish(
            lifecycle,
            EventStatus.FORWARDED_TO_CALL_API,
            "call_dispatched",
            call_reference=call_reference,
        )
        return RelayResult(
            200,
            RelayOutcome.FORWARDED,
            event_id=event_id,
            call_reference=call_reference,
            phone_source=match.source,
        )

    async def _finish(
        self,
        lifecycle: EventLifecycle,
        target: EventStatus,
        trigger: str,
        *,
        call_reference: str | None = None,
        error: str | None = None,
    ) -> None:
        """Valida a transição e grava o desfecho (falha de patch só é logada)."""
        result = lifecycle.transition(target, trigger)
        if not result.success:
            raise RuntimeError(result.error_reason or "invalid_transition")
        if result.transition is not None:
            logger.debug(
                "argus_event_transition",
                extra={
                    "event_id": mask_key(lifecycle.event_id, visible=16),
                    **result.transition.to_log_dict(),
                },
            )

        # Colunas de desfecho sempre gravadas: um desfecho anterior não sobrevive
        patch: dict[str, Any] = {
            "status": target,
            "processed_at": datetime.now(UTC),
            "call_reference": call_reference,
            "error": error,
        }

        try:
            await self._store.patch(lifecycle.event_id, patch)
        except EventStoreError as exc:
            logger.error(
                "event_patch_failed",
                extra={
                    "event_id": mask_key(lifecycle.event_id, visible=16),
                    "status": target.value,
                    "error": str(exc),
                },
            )


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
