"""Subsistema de email: ciclo de vida dos mailers.

Mailers são criados sob demanda. O subsistema só é considerado
inicializado depois que o primeiro mailer é criado no processo; antes
disso o coletor do profiler não consulta os loggers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.mail.mailer import ChannelMailer
from app.infra.mail.spool import MemorySpool

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.infra.mail.registry import MessageLoggerRegistry
    from app.protocols.mail import MailTransportProtocol
    from config.settings.mail import MailChannelSettings, MailSettings

logger = logging.getLogger(__name__)


class MailSubsystem:
    """Ponto de acesso aos mailers (MailSubsystemStatusProtocol)."""

    def __init__(
        self,
        settings: MailSettings,
        registry: MessageLoggerRegistry,
        transport_factory: Callable[[MailChannelSettings], MailTransportProtocol],
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._transport_factory = transport_factory
        self._mailers: dict[str, ChannelMailer] = {}
        self._initialized = False

    @property
    def settings(self) -> MailSettings:
        return self._settings

    @property
    def registry(self) -> MessageLoggerRegistry:
        return self._registry

    @property
    def default_channel(self) -> str:
        return self._settings.default_channel

    def is_initialized(self) -> bool:
        """True se algum mailer já foi criado neste processo."""
        return self._initialized

    def get_mailer(self, name: str | None = None) -> ChannelMailer:
        """Retorna (criando sob demanda) o mailer do canal.

        Args:
            name: Nome do canal. Usa o canal padrão se None.

        Raises:
            UnknownMailChannelError: Se o canal não está configurado.
        """
        channel_name = name or self._settings.default_channel
        mailer = self._mailers.get(channel_name)
        if mailer is not None:
            return mailer

        channel = self._registry.get_channel(channel_name)
        mailer = ChannelMailer(
            name=channel.name,
            transport=self._transport_factory(channel),
            spool=MemorySpool() if channel.spool_enabled else None,
            message_logger=self._registry.try_get_logger(channel.name),
            from_email=channel.from_email,
        )
        self._mailers[channel_name] = mailer
        if not self._initialized:
            self._initialized = True
            logger.info("mail_subsystem_initialized", extra={"channel": channel_name})
        return mailer

    def flush_spools(self) -> int:
        """Entrega mensagens enfileiradas de todos os mailers criados.

        Returns:
            Total de mensagens entregues.
        """
        if not self._initialized:
            return 0
        return sum(mailer.flush_queue() for mailer in self._mailers.values())
