"""Métricas do relay registradas como logs estruturados.

As métricas podem ser agregadas depois pelo coletor de logs (Cloud
Logging, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Desfecho: contador de eventos por status final
- Dispatch: resultado de cada tentativa de início de chamada

Uso:
    from app.observability import record_latency, record_relay_outcome

    start = time.perf_counter()
    result = await use_case.execute(request)
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("argus_webhook", "relay", latency_ms, correlation_id)
    record_relay_outcome(result.outcome, correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "argus_webhook", "vapi")
        operation: Nome da operação (ex: "relay", "start_call")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_relay_outcome(
    outcome: str,
    correlation_id: str | None = None,
    metadata: dict[str, str | float | int] | None = None,
) -> None:
    """Registra o desfecho de um evento (forwarded, invalid_phone, ...).

    Args:
        outcome: Status final devolvido ao Argus
        correlation_id: ID de correlação para rastreamento
        metadata: Metadados adicionais opcionais (sem PII)
    """
    extra: dict[str, object] = {
        "metric_type": "relay_outcome",
        "component": "argus_relay",
        "outcome": str(outcome),
        "correlation_id": correlation_id,
    }
    if metadata:
        extra.update(metadata)

    logger.info("metric_relay_outcome", extra=extra)


def record_dispatch(
    success: bool,
    latency_ms: float,
    status_code: int | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra uma tentativa de início de chamada na API de voz.

    Args:
        success: Se a API aceitou a chamada
        latency_ms: Latência da chamada em milissegundos
        status_code: Status HTTP em caso de falha (None em erro de transporte)
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_dispatch",
        extra={
            "metric_type": "dispatch",
            "component": "vapi",
            "success": success,
            "latency_ms": round(latency_ms, 2),
            "status_code": status_code,
            "correlation_id": correlation_id,
        },
    )
