"""Testes do MessageLoggerRegistry e do MailSubsystem."""

from __future__ import annotations

import pytest

from app.infra.mail import (
    MailSubsystem,
    MemoryMessageLogger,
    MemoryTransport,
    MessageLoggerRegistry,
    UnknownMailChannelError,
)
from config.settings.mail import MailChannelSettings, MailSettings
from tests.fakes.fake_mail import build_message


class TestMessageLoggerRegistry:
    """Testes do registro canal -> logger."""

    def test_from_settings_creates_loggers_for_logged_channels(self) -> None:
        settings = MailSettings(
            channels=(
                MailChannelSettings(name="a"),
                MailChannelSettings(name="b", logging_enabled=False),
                MailChannelSettings(name="c", max_logged_messages=3),
            ),
            default_channel="a",
        )

        registry = MessageLoggerRegistry.from_settings(settings)

        assert registry.channel_names() == ["a", "b", "c"]
        assert registry.default_channel == "a"
        assert isinstance(registry.try_get_logger("a"), MemoryMessageLogger)
        assert registry.try_get_logger("b") is None
        c_logger = registry.try_get_logger("c")
        assert isinstance(c_logger, MemoryMessageLogger)
        assert c_logger.max_messages == 3

    def test_try_get_logger_unknown_channel(self) -> None:
        registry = MessageLoggerRegistry((), "default")
        assert registry.try_get_logger("nope") is None

    def test_is_spool_enabled(self, mail_settings: MailSettings) -> None:
        registry = MessageLoggerRegistry.from_settings(mail_settings)
        assert registry.is_spool_enabled("primary") is False
        assert registry.is_spool_enabled("secondary") is True

    def test_is_spool_enabled_unknown_channel_raises(self, mail_settings: MailSettings) -> None:
        registry = MessageLoggerRegistry.from_settings(mail_settings)
        with pytest.raises(UnknownMailChannelError, match="nope"):
            registry.is_spool_enabled("nope")

    def test_negative_cap_builds_unlimited_logger(self) -> None:
        """Limite inválido não derruba o boot; validate() reporta o erro."""
        settings = MailSettings(channels=(MailChannelSettings(name="primary", max_logged_messages=-1),))

        registry = MessageLoggerRegistry.from_settings(settings)

        primary_logger = registry.try_get_logger("primary")
        assert primary_logger is not None
        assert primary_logger.max_messages == 0
        assert any("MAX_LOGGED_MESSAGES" in error for error in settings.validate())


class TestMailSubsystem:
    """Testes do ciclo de vida do subsistema."""

    def test_not_initialized_until_first_mailer(self, mail_subsystem: MailSubsystem) -> None:
        assert mail_subsystem.is_initialized() is False
        mail_subsystem.get_mailer()
        assert mail_subsystem.is_initialized() is True

    def test_get_mailer_defaults_to_default_channel(self, mail_subsystem: MailSubsystem) -> None:
        assert mail_subsystem.get_mailer().name == "primary"

    def test_get_mailer_is_cached(self, mail_subsystem: MailSubsystem) -> None:
        assert mail_subsystem.get_mailer("secondary") is mail_subsystem.get_mailer("secondary")

    def test_mailer_uses_channel_settings(
        self, mail_subsystem: MailSubsystem, transports: dict[str, MemoryTransport]
    ) -> None:
        secondary = mail_subsystem.get_mailer("secondary")
        secondary.send(build_message())

        assert secondary.is_queued is True
        assert transports["secondary"].sent == []
        logger_ = mail_subsystem.registry.try_get_logger("secondary")
        assert logger_ is not None
        assert logger_.count_messages() == 1

    def test_unknown_channel_raises(self, mail_subsystem: MailSubsystem) -> None:
        with pytest.raises(UnknownMailChannelError):
            mail_subsystem.get_mailer("nope")
        assert mail_subsystem.is_initialized() is False

    def test_flush_spools(self, mail_subsystem: MailSubsystem, transports: dict[str, MemoryTransport]) -> None:
        mail_subsystem.get_mailer("primary").send(build_message("direto"))
        mail_subsystem.get_mailer("secondary").send(build_message("fila 1"))
        mail_subsystem.get_mailer("secondary").send(build_message("fila 2"))

        assert mail_subsystem.flush_spools() == 2
        assert [m["Subject"] for m in transports["secondary"].sent] == ["fila 1", "fila 2"]
        assert mail_subsystem.flush_spools() == 0

    def test_flush_before_initialization(self, mail_subsystem: MailSubsystem) -> None:
        assert mail_subsystem.flush_spools() == 0
