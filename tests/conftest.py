"""Configuração do pytest para o projeto Carteiro."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.infra.mail import MailSubsystem, MemoryTransport  # noqa: E402
from app.infra.mail.registry import MessageLoggerRegistry  # noqa: E402
from config.settings.mail import MailChannelSettings, MailSettings  # noqa: E402


@pytest.fixture
def mail_settings() -> MailSettings:
    """Dois canais: primary (padrão, envio imediato) e secondary (spool)."""
    return MailSettings(
        channels=(
            MailChannelSettings(name="primary"),
            MailChannelSettings(name="secondary", spool_enabled=True),
        ),
        default_channel="primary",
    )


@pytest.fixture
def transports() -> dict[str, MemoryTransport]:
    return {}


@pytest.fixture
def mail_subsystem(mail_settings: MailSettings, transports: dict[str, MemoryTransport]) -> MailSubsystem:
    """Subsistema com transportes em memória acessíveis por canal."""

    def _factory(channel: MailChannelSettings) -> MemoryTransport:
        transport = MemoryTransport()
        transports[channel.name] = transport
        return transport

    return MailSubsystem(
        settings=mail_settings,
        registry=MessageLoggerRegistry.from_settings(mail_settings),
        transport_factory=_factory,
    )
