"""Spool em memória: fila de mensagens para entrega posterior."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from email.message import EmailMessage

    from app.protocols.mail import MailTransportProtocol

logger = logging.getLogger(__name__)


class MemorySpool:
    """Fila FIFO de mensagens aguardando flush."""

    def __init__(self) -> None:
        self._queue: deque[EmailMessage] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def queue_message(self, message: EmailMessage) -> None:
        """Enfileira mensagem para envio posterior."""
        self._queue.append(message)

    def flush(self, transport: MailTransportProtocol) -> int:
        """Entrega todas as mensagens enfileiradas.

        Mensagens só saem da fila após envio bem-sucedido; uma falha
        no transporte interrompe o flush e propaga a exceção.

        Returns:
            Quantidade de mensagens entregues.
        """
        sent = 0
        while self._queue:
            transport.send(self._queue[0])
            self._queue.popleft()
            sent += 1
        if sent:
            logger.debug("spool_flushed", extra={"sent_count": sent})
        return sent
