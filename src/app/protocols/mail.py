"""Protocolos do subsistema de email consumidos pelo coletor e pelos mailers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from email.message import EmailMessage


class MessageLoggerProtocol(Protocol):
    """Logger que registra cada mensagem enviada por um canal."""

    def record(self, message: EmailMessage) -> None: ...

    def get_messages(self) -> Sequence[EmailMessage]: ...

    def count_messages(self) -> int: ...


class MessageLoggerRegistryProtocol(Protocol):
    """Registro tipado canal -> logger opcional, populado na configuração."""

    @property
    def default_channel(self) -> str: ...

    def channel_names(self) -> list[str]: ...

    def try_get_logger(self, channel: str) -> MessageLoggerProtocol | None: ...

    def is_spool_enabled(self, channel: str) -> bool: ...


class MailSubsystemStatusProtocol(Protocol):
    """Estado do ciclo de vida do subsistema de email."""

    def is_initialized(self) -> bool: ...


class MailTransportProtocol(Protocol):
    """Contrato mínimo de transporte (entrega efetiva da mensagem)."""

    def send(self, message: EmailMessage) -> None: ...
