"""
Regras de transição válidas entre status de um evento.

Dentro de uma invocação o grafo é uma estrela: RECEIVED leva a exatamente
um desfecho e desfechos não têm saída.
"""

from fsm.states.event import TERMINAL_STATES, EventStatus

TransitionMap = dict[EventStatus, frozenset[EventStatus]]

VALID_TRANSITIONS: TransitionMap = {
    EventStatus.RECEIVED: frozenset({
        EventStatus.QUEUED,
        EventStatus.FORWARDED_TO_CALL_API,
        EventStatus.INVALID_PHONE,
        EventStatus.CALL_API_ERROR,
    }),

    EventStatus.QUEUED: frozenset(),
    EventStatus.FORWARDED_TO_CALL_API: frozenset(),
    EventStatus.INVALID_PHONE: frozenset(),
    EventStatus.CALL_API_ERROR: frozenset(),
}


def get_valid_targets(state: EventStatus) -> frozenset[EventStatus]:
    """
    Retorna os status de destino válidos para um status de origem.

    Args:
        state: Status de origem

    Returns:
        Conjunto de destinos permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: EventStatus, to_state: EventStatus) -> bool:
    """Verifica se uma transição é válida segundo o grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in EventStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Status {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Status terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        for target in targets:
            if not isinstance(target, EventStatus):
                errors.append(
                    f"Transição {from_state.name} → {target}: destino inválido"
                )

    return errors
