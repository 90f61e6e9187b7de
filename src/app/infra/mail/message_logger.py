"""Logger de mensagens por canal (plugin de envio).

Registra cada mensagem antes do envio e mantém contagem acumulada.
Com max_messages > 0 apenas as N mensagens mais recentes são mantidas,
mas a contagem continua incluindo todos os envios.

Dentro de uma captura (message_capture()), o registro vai também para um
buffer da requisição atual, guardado em ContextVar, e as leituras passam
a enxergar apenas esse buffer. Requisições concorrentes nunca veem as
mensagens umas das outras.

Uso:
    with message_capture():
        mailer.send(message)
        message_logger.get_messages()  # só as mensagens desta captura
"""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from email.message import EmailMessage


class _CapturedLog:
    """Mensagens e contagem de um logger dentro de uma captura."""

    __slots__ = ("count", "messages")

    def __init__(self, max_messages: int) -> None:
        self.messages: deque[EmailMessage] = deque(maxlen=max_messages or None)
        self.count = 0


class MessageCapture:
    """Buffer por requisição: logger -> mensagens registradas na captura."""

    def __init__(self) -> None:
        self._logs: dict[MemoryMessageLogger, _CapturedLog] = {}

    def log_for(self, message_logger: MemoryMessageLogger) -> _CapturedLog:
        log = self._logs.get(message_logger)
        if log is None:
            log = _CapturedLog(message_logger.max_messages)
            self._logs[message_logger] = log
        return log

    def find(self, message_logger: MemoryMessageLogger) -> _CapturedLog | None:
        return self._logs.get(message_logger)


_capture: ContextVar[MessageCapture | None] = ContextVar("mail_message_capture", default=None)


@contextmanager
def message_capture() -> Iterator[MessageCapture]:
    """Escopo de captura (ex: uma requisição HTTP)."""
    capture = MessageCapture()
    token = _capture.set(capture)
    try:
        yield capture
    finally:
        _capture.reset(token)


class MemoryMessageLogger:
    """Logger de mensagens em memória (MessageLoggerProtocol)."""

    def __init__(self, max_messages: int = 0) -> None:
        if max_messages < 0:
            raise ValueError("max_messages deve ser >= 0")
        self._messages: deque[EmailMessage] = deque(maxlen=max_messages or None)
        self._count = 0

    @property
    def max_messages(self) -> int:
        return self._messages.maxlen or 0

    def record(self, message: EmailMessage) -> None:
        """Registra mensagem prestes a ser enviada."""
        self._messages.append(message)
        self._count += 1

        capture = _capture.get()
        if capture is not None:
            log = capture.log_for(self)
            log.messages.append(message)
            log.count += 1

    def get_messages(self) -> list[EmailMessage]:
        """Mensagens registradas, na ordem de registro."""
        capture = _capture.get()
        if capture is not None:
            log = capture.find(self)
            return list(log.messages) if log is not None else []
        return list(self._messages)

    def count_messages(self) -> int:
        """Total de mensagens registradas (na captura atual, se houver)."""
        capture = _capture.get()
        if capture is not None:
            log = capture.find(self)
            return log.count if log is not None else 0
        return self._count

    def clear(self) -> None:
        """Descarta mensagens e zera a contagem fora de captura."""
        self._messages.clear()
        self._count = 0
