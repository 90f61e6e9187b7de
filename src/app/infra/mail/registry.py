"""Registro tipado de loggers de mensagens por canal.

Populado uma vez na configuração: cada canal com logging habilitado
recebe um MemoryMessageLogger; os demais ficam sem logger.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from app.infra.mail.errors import UnknownMailChannelError
from app.infra.mail.message_logger import MemoryMessageLogger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from app.protocols.mail import MessageLoggerProtocol
    from config.settings.mail import MailChannelSettings, MailSettings


class MessageLoggerRegistry:
    """Canal -> logger opcional (MessageLoggerRegistryProtocol)."""

    def __init__(
        self,
        channels: Sequence[MailChannelSettings],
        default_channel: str,
        loggers: Mapping[str, MessageLoggerProtocol] | None = None,
    ) -> None:
        self._channels: dict[str, MailChannelSettings] = {channel.name: channel for channel in channels}
        self._default_channel = default_channel
        self._loggers = MappingProxyType(dict(loggers or {}))

    @classmethod
    def from_settings(cls, settings: MailSettings) -> MessageLoggerRegistry:
        """Cria registro com um logger por canal com logging habilitado.

        Limite negativo vira 0 (sem limite); MailSettings.validate() reporta o erro.
        """
        loggers = {
            channel.name: MemoryMessageLogger(max_messages=max(channel.max_logged_messages, 0))
            for channel in settings.channels
            if channel.logging_enabled
        }
        return cls(settings.channels, settings.default_channel, loggers)

    @property
    def default_channel(self) -> str:
        return self._default_channel

    def channel_names(self) -> list[str]:
        """Canais na ordem de configuração."""
        return list(self._channels)

    def get_channel(self, channel: str) -> MailChannelSettings:
        """Settings do canal.

        Raises:
            UnknownMailChannelError: Se o canal não está configurado.
        """
        try:
            return self._channels[channel]
        except KeyError:
            raise UnknownMailChannelError(channel) from None

    def try_get_logger(self, channel: str) -> MessageLoggerProtocol | None:
        """Logger do canal ou None se logging não está habilitado."""
        return self._loggers.get(channel)

    def is_spool_enabled(self, channel: str) -> bool:
        return self.get_channel(channel).spool_enabled

