"""Observabilidade: logs estruturados, métricas e profiler por requisição.

Re-exporta correlation_id, métricas, profiler e o coletor de email.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import MailMessageCollector, Profiler
"""

from app.observability.correlation import (
    CORRELATION_ID_HEADER,
    correlation_id_from_headers,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.errors import ChannelDataNotFoundError, CollectorNotFoundError
from app.observability.mail_collector import COLLECTOR_NAME, MailMessageCollector
from app.observability.metrics import (
    record_latency,
    record_mail_collection,
    record_profile_stored,
)
from app.observability.profiler import MemoryProfileStore, Profile, Profiler

__all__ = [
    "COLLECTOR_NAME",
    "CORRELATION_ID_HEADER",
    "ChannelDataNotFoundError",
    "CollectorNotFoundError",
    "MailMessageCollector",
    "MemoryProfileStore",
    "Profile",
    "Profiler",
    "correlation_id_from_headers",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_mail_collection",
    "record_profile_stored",
    "reset_correlation_id",
    "set_correlation_id",
]
