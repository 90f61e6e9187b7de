"""Factories: criação de implementações concretas.

Este módulo centraliza a criação do subsistema de email, dos coletores
e do profiler a partir das settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.mail import (
    LoggingTransport,
    MailSubsystem,
    MemoryTransport,
    MessageLoggerRegistry,
    NullTransport,
    message_capture,
)
from app.observability.mail_collector import MailMessageCollector
from app.observability.profiler import MemoryProfileStore, Profiler

if TYPE_CHECKING:
    from app.protocols.mail import MailTransportProtocol
    from config.settings import BaseSettings, MailChannelSettings, MailSettings

logger = logging.getLogger(__name__)


def create_transport(channel: MailChannelSettings) -> MailTransportProtocol:
    """Cria transporte conforme MAIL_<NOME>_TRANSPORT.

    Raises:
        ValueError: Se o tipo de transporte é desconhecido.
    """
    if channel.transport == "memory":
        return MemoryTransport()
    if channel.transport == "logging":
        return LoggingTransport(channel=channel.name)
    if channel.transport == "null":
        return NullTransport()
    raise ValueError(f"Transporte de email inválido para {channel.name}: {channel.transport}")


def create_message_logger_registry(settings: MailSettings) -> MessageLoggerRegistry:
    """Cria registro de loggers (um por canal com logging habilitado)."""
    registry = MessageLoggerRegistry.from_settings(settings)
    logger.debug(
        "message_logger_registry_created",
        extra={
            "channel_count": len(settings.channels),
            "logged_channels": [
                name for name in registry.channel_names() if registry.try_get_logger(name) is not None
            ],
        },
    )
    return registry


def create_mail_subsystem(settings: MailSettings) -> MailSubsystem:
    """Cria subsistema de email (mailers são criados sob demanda)."""
    return MailSubsystem(
        settings=settings,
        registry=create_message_logger_registry(settings),
        transport_factory=create_transport,
    )


def create_mail_collector(subsystem: MailSubsystem) -> MailMessageCollector:
    """Cria coletor de email ligado ao registro e ao estado do subsistema."""
    return MailMessageCollector(registry=subsystem.registry, status=subsystem)


def create_profiler(base: BaseSettings, subsystem: MailSubsystem) -> Profiler:
    """Cria profiler com os coletores registrados.

    Cada requisição roda dentro de uma captura de mensagens própria, então
    o painel de email mostra apenas os envios daquela requisição.
    """
    return Profiler(
        collector_factories=[lambda: create_mail_collector(subsystem)],
        # Limite inválido vira 1; BaseSettings.validate() reporta o erro
        store=MemoryProfileStore(max_profiles=max(base.profiler_max_profiles, 1)),
        enabled=base.profiler_enabled,
        request_scopes=[message_capture],
    )
