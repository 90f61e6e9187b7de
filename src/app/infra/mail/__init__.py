"""Mail: implementações concretas do subsistema de email.

Módulos disponíveis:
    - message_logger: logger de mensagens por canal e captura por requisição
    - registry: registro tipado canal -> logger
    - transports: transportes (memória, log, nulo)
    - spool: fila de mensagens para envio posterior
    - mailer: envio por canal
    - subsystem: ciclo de vida dos mailers
"""

from __future__ import annotations

from app.infra.mail.errors import InvalidMailMessageError, UnknownMailChannelError
from app.infra.mail.mailer import ChannelMailer, count_recipients
from app.infra.mail.message_logger import MemoryMessageLogger, MessageCapture, message_capture
from app.infra.mail.registry import MessageLoggerRegistry
from app.infra.mail.spool import MemorySpool
from app.infra.mail.subsystem import MailSubsystem
from app.infra.mail.transports import LoggingTransport, MemoryTransport, NullTransport

__all__ = [
    "ChannelMailer",
    "InvalidMailMessageError",
    "LoggingTransport",
    "MailSubsystem",
    "MemoryMessageLogger",
    "MemorySpool",
    "MemoryTransport",
    "MessageCapture",
    "MessageLoggerRegistry",
    "NullTransport",
    "UnknownMailChannelError",
    "count_recipients",
    "message_capture",
]
