"""Contratos da API de chamadas da Vapi."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VapiCustomer(BaseModel):
    """Destino da chamada."""

    model_config = ConfigDict(extra="ignore")

    number: str


class VapiCallRequest(BaseModel):
    """Corpo de `POST /call`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    assistant_id: str | None = Field(default=None, alias="assistantId")
    phone_number_id: str | None = Field(default=None, alias="phoneNumberId")
    customer: VapiCustomer
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """JSON com aliases camelCase, omitindo ids não configurados."""
        return self.model_dump(by_alias=True, exclude_none=True)


class VapiCallResponse(BaseModel):
    """Resposta de `POST /call` (apenas o que o relay consome)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    status: str | None = None
