"""Protocolo da API de chamadas de saída (colaborador externo)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class CallRequest:
    """Pedido de início de chamada.

    Attributes:
        destination: Número de destino já formatado
        origin: Identificador do número de origem (opcional)
        assistant_id: Assistente/roteamento na API de voz (opcional)
        metadata: Dados que ligam a chamada de volta ao evento
    """

    destination: str
    origin: str | None = None
    assistant_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class CallDispatcherProtocol(Protocol):
    """Contrato mínimo do dispatcher de chamadas.

    Falhas (status não-2xx ou erro de transporte) são levantadas como
    `CallDispatchError`.
    """

    async def start_call(self, request: CallRequest) -> str | None:
        """Inicia a chamada e devolve a referência retornada pela API."""
        ...
