"""
Status canônicos de um evento Argus no log de eventos.

Cada invocação do webhook começa em RECEIVED (após a gravação inicial) e
termina em exatamente um status de desfecho. Uma reentrega posterior com a
mesma chave pode reabrir o ciclo, exceto quando a chamada já foi
encaminhada.
"""

from enum import StrEnum


class EventStatus(StrEnum):
    """
    Status persistidos na coluna `status` do log de eventos.

    Não-terminal:
        - RECEIVED: Evento gravado, processamento em andamento

    Terminais (por invocação):
        - QUEUED: Dry-run; evento aceito sem contato com a Vapi
        - FORWARDED_TO_CALL_API: Chamada criada na Vapi
        - INVALID_PHONE: Nenhum telefone válido no payload
        - CALL_API_ERROR: Vapi recusou ou ficou inacessível
    """

    RECEIVED = "received"

    QUEUED = "queued"
    FORWARDED_TO_CALL_API = "forwarded_to_call_api"
    INVALID_PHONE = "invalid_phone"
    CALL_API_ERROR = "call_api_error"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[EventStatus] = frozenset({
    EventStatus.QUEUED,
    EventStatus.FORWARDED_TO_CALL_API,
    EventStatus.INVALID_PHONE,
    EventStatus.CALL_API_ERROR,
})

# Desfechos que permitem reprocessar uma reentrega com a mesma chave
REDELIVERABLE_STATES: frozenset[EventStatus] = frozenset({
    EventStatus.RECEIVED,
    EventStatus.QUEUED,
    EventStatus.INVALID_PHONE,
    EventStatus.CALL_API_ERROR,
})

DEFAULT_INITIAL_STATE: EventStatus = EventStatus.RECEIVED


def is_terminal(state: EventStatus) -> bool:
    """Verifica se o status encerra a invocação corrente."""
    return state in TERMINAL_STATES


def is_valid_state(state: object) -> bool:
    """Verifica se o valor é um EventStatus válido."""
    return isinstance(state, EventStatus)


def parse_status(value: object) -> EventStatus | None:
    """Converte o valor lido do store em EventStatus (None se desconhecido)."""
    if isinstance(value, EventStatus):
        return value
    try:
        return EventStatus(str(value))
    except ValueError:
        return None
