"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente pelo sistema de logs.

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Coleta de email: canais e mensagens vistos por requisição
- Profile armazenado: token e quantidade de coletores

Uso:
    from app.observability.metrics import record_latency, record_mail_collection

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("profiler", "collect", latency_ms, correlation_id)
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
        component: Nome do componente (ex: "profiler")
        operation: Nome da operação (ex: "collect")
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


def record_mail_collection(
    channel_count: int,
    message_count: int,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de uma coleta de email.

    Args:
        channel_count: Canais com logger coletados
        message_count: Total de mensagens somado entre canais
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_mail_collection",
        extra={
            "metric_type": "mail_collection",
            "component": "mail_collector",
            "channel_count": channel_count,
            "message_count": message_count,
            "correlation_id": correlation_id,
        },
    )


def record_profile_stored(
    token: str,
    collector_count: int,
    correlation_id: str | None = None,
) -> None:
    """Registra armazenamento de um profile."""
    logger.info(
        "metric_profile_stored",
        extra={
            "metric_type": "profile_stored",
            "component": "profiler",
            "token": token,
            "collector_count": collector_count,
            "correlation_id": correlation_id,
        },
    )
