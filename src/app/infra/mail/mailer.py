"""Mailer de um canal de email.

Fluxo de envio:
1. Completa cabeçalhos obrigatórios (From, Date, Message-ID)
2. Registra a mensagem no logger do canal (se houver)
3. Enfileira no spool (canal em modo fila) ou entrega via transporte
"""

from __future__ import annotations

import logging
from email.utils import formatdate, getaddresses, make_msgid
from typing import TYPE_CHECKING

from app.infra.mail.errors import InvalidMailMessageError

if TYPE_CHECKING:
    from email.message import EmailMessage

    from app.infra.mail.spool import MemorySpool
    from app.protocols.mail import MailTransportProtocol, MessageLoggerProtocol

logger = logging.getLogger(__name__)

RECIPIENT_HEADERS = ("To", "Cc", "Bcc")


def count_recipients(message: EmailMessage) -> int:
    """Conta endereços em To, Cc e Bcc."""
    values = [str(value) for header in RECIPIENT_HEADERS for value in message.get_all(header, [])]
    return sum(1 for _, address in getaddresses(values) if address)


class ChannelMailer:
    """Envia mensagens por um canal configurado."""

    def __init__(
        self,
        name: str,
        transport: MailTransportProtocol,
        spool: MemorySpool | None = None,
        message_logger: MessageLoggerProtocol | None = None,
        from_email: str = "",
    ) -> None:
        self.name = name
        self._transport = transport
        self._spool = spool
        self._message_logger = message_logger
        self._from_email = from_email

    @property
    def is_queued(self) -> bool:
        """True se o canal usa spool."""
        return self._spool is not None

    @property
    def queued_count(self) -> int:
        return len(self._spool) if self._spool is not None else 0

    def send(self, message: EmailMessage) -> int:
        """Envia (ou enfileira) uma mensagem.

        Args:
            message: Mensagem a enviar.

        Returns:
            Quantidade de destinatários aceitos.

        Raises:
            InvalidMailMessageError: Se a mensagem não tem destinatários.
        """
        recipients = count_recipients(message)
        if recipients == 0:
            raise InvalidMailMessageError("Mensagem sem destinatários (To/Cc/Bcc)")

        self._fill_headers(message)

        if self._message_logger is not None:
            self._message_logger.record(message)

        if self._spool is not None:
            self._spool.queue_message(message)
        else:
            self._transport.send(message)

        logger.debug(
            "mail_accepted",
            extra={
                "channel": self.name,
                "queued": self.is_queued,
                "recipient_count": recipients,
            },
        )
        return recipients

    def flush_queue(self) -> int:
        """Entrega mensagens enfileiradas. Retorna quantidade entregue."""
        if self._spool is None:
            return 0
        return self._spool.flush(self._transport)

    def _fill_headers(self, message: EmailMessage) -> None:
        if "From" not in message and self._from_email:
            message["From"] = self._from_email
        if "Date" not in message:
            message["Date"] = formatdate(localtime=False, usegmt=True)
        if "Message-ID" not in message:
            message["Message-ID"] = make_msgid()
