"""Transportes de email: entrega efetiva das mensagens.

Módulos de transporte disponíveis:
    - MemoryTransport: guarda mensagens em memória (dev/test)
    - LoggingTransport: registra envio em log estruturado, sem PII
    - NullTransport: descarta mensagens
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from email.message import EmailMessage

logger = logging.getLogger(__name__)


class MemoryTransport:
    """Transporte em memória: apenas para desenvolvimento e testes."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.sent.append(message)


class LoggingTransport:
    """Transporte que apenas registra o envio em log.

    Registra somente Message-ID e quantidade de partes; nunca assunto,
    corpo ou endereços.
    """

    def __init__(self, channel: str = "") -> None:
        self._channel = channel

    def send(self, message: EmailMessage) -> None:
        parts = sum(1 for _ in message.iter_parts()) if message.is_multipart() else 1
        logger.info(
            "mail_sent",
            extra={
                "channel": self._channel,
                "message_id": message.get("Message-ID", ""),
                "part_count": parts,
            },
        )


class NullTransport:
    """Transporte que descarta todas as mensagens."""

    def send(self, message: EmailMessage) -> None:
        return None
