"""Log de eventos no Supabase via PostgREST.

Contrato da tabela (ver scripts/sql/argus_events.sql):
    external_id TEXT UNIQUE, event_type, payload JSONB, status,
    vapi_call_id, error, processed_at

Insert-or-merge usa `on_conflict=external_id` com
`Prefer: resolution=merge-duplicates`, atômico no Postgres.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Final

from app.domain.event_record import EventRecord
from app.infra.http import HttpClient, HttpClientConfig, HttpError
from app.protocols.event_store import EventStoreProtocol
from fsm.states.event import EventStatus, parse_status
from utils.errors import EventStoreError
from utils.sanitizer import mask_key

if TYPE_CHECKING:
    from collections.abc import Awaitable, Mapping

    import httpx

    from config.settings import SupabaseSettings

logger = logging.getLogger(__name__)

CONFLICT_COLUMN: Final[str] = "external_id"
UPSERT_PREFER: Final[str] = "resolution=merge-duplicates,return=minimal"
PATCH_PREFER: Final[str] = "return=minimal"
SELECT_COLUMNS: Final[str] = (
    "external_id,event_type,payload,status,vapi_call_id,error,processed_at"
)

# Nome da coluna no banco para campos cujo nome difere no domínio
COLUMN_MAP: Final[dict[str, str]] = {"call_reference": "vapi_call_id"}


def _to_column_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    # EventStatus é StrEnum
    if isinstance(value, str):
        return str(value)
    return value


def to_row(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Converte campos do domínio em colunas da tabela."""
    return {COLUMN_MAP.get(name, name): _to_column_value(value) for name, value in fields.items()}


def from_row(row: Mapping[str, Any]) -> EventRecord:
    """Converte uma linha da tabela em EventRecord."""
    processed_at = row.get("processed_at")
    return EventRecord(
        external_id=str(row["external_id"]),
        event_type=row.get("event_type") or "unknown",
        payload=row.get("payload") or {},
        status=parse_status(row.get("status")) or EventStatus.RECEIVED,
        call_reference=row.get("vapi_call_id"),
        error=row.get("error"),
        processed_at=datetime.fromisoformat(processed_at) if processed_at else None,
    )


class SupabaseEventStore(EventStoreProtocol):
    """EventStore sobre a REST API do Supabase (service role).

    Args:
        settings: SupabaseSettings com URL, chave e tabela
        http_client: HttpClient opcional (injeção em testes)
    """

    def __init__(
        self,
        settings: SupabaseSettings,
        http_client: HttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._endpoint = settings.table_endpoint
        self._http = http_client or HttpClient(
            HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
                backoff_base_seconds=0.5,
                backoff_max_seconds=5.0,
            )
        )

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._settings.service_role_key,
            "Authorization": f"Bearer {self._settings.service_role_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def insert_or_merge(self, record: EventRecord) -> None:
        fields: dict[str, Any] = {
            "external_id": record.external_id,
            "event_type": record.event_type,
            "payload": record.payload,
            "status": record.status,
            "call_reference": record.call_reference,
            "error": record.error,
            "processed_at": record.processed_at,
        }
        row = to_row({name: value for name, value in fields.items() if value is not None})

        response = await self._send(
            "upsert",
            record.external_id,
            self._http.post(
                self._endpoint,
                json=[row],
                headers=self._headers(UPSERT_PREFER),
                params={"on_conflict": CONFLICT_COLUMN},
            ),
        )
        self._raise_for_status("upsert", record.external_id, response)

    async def patch(self, external_id: str, fields: Mapping[str, Any]) -> None:
        response = await self._send(
            "patch",
            external_id,
            self._http.patch(
                self._endpoint,
                json=to_row(fields),
                headers=self._headers(PATCH_PREFER),
                params={"external_id": f"eq.{external_id}"},
            ),
        )
        self._raise_for_status("patch", external_id, response)

    async def fetch(self, external_id: str) -> EventRecord | None:
        response = await self._send(
            "fetch",
            external_id,
            self._http.get(
                self._endpoint,
                headers=self._headers(),
                params={
                    "external_id": f"eq.{external_id}",
                    "select": SELECT_COLUMNS,
                    "limit": "1",
                },
            ),
        )
        self._raise_for_status("fetch", external_id, response)

        try:
            rows = response.json()
        except ValueError as exc:
            raise EventStoreError("supabase_invalid_response") from exc
        if not isinstance(rows, list) or not rows:
            return None
        return from_row(rows[0])

    async def _send(
        self, operation: str, external_id: str, call: Awaitable[httpx.Response]
    ) -> httpx.Response:
        try:
            return await call
        except HttpError as exc:
            logger.warning(
                "supabase_request_failed",
                extra={
                    "operation": operation,
                    "external_id": mask_key(external_id),
                    "status_code": exc.status_code,
                    "error_type": type(exc).__name__,
                },
            )
            raise EventStoreError(f"supabase_{operation}_failed") from exc

    def _raise_for_status(
        self, operation: str, external_id: str, response: httpx.Response
    ) -> None:
        if response.is_success:
            return
        logger.warning(
            "supabase_request_rejected",
            extra={
                "operation": operation,
                "external_id": mask_key(external_id),
                "status_code": response.status_code,
            },
        )
        raise EventStoreError(
            f"supabase_{operation}_failed: {response.status_code} {response.text[:200]}"
        )
