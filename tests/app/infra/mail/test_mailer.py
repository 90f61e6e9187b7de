"""Testes do ChannelMailer, spool e transportes."""

from __future__ import annotations

import logging
from email.message import EmailMessage

import pytest

from app.infra.mail import (
    ChannelMailer,
    InvalidMailMessageError,
    LoggingTransport,
    MemoryMessageLogger,
    MemorySpool,
    MemoryTransport,
    NullTransport,
    count_recipients,
)
from tests.fakes.fake_mail import build_message


class _FailingTransport:
    def send(self, message: EmailMessage) -> None:
        raise ConnectionError("smtp indisponível")


class TestCountRecipients:
    """Testes para count_recipients."""

    def test_counts_to_cc_bcc(self) -> None:
        message = build_message(to="a@example.com, B <b@example.com>")
        message["Cc"] = "c@example.com"
        message["Bcc"] = "d@example.com"
        assert count_recipients(message) == 4

    def test_no_recipients(self) -> None:
        assert count_recipients(EmailMessage()) == 0


class TestChannelMailer:
    """Testes do envio por canal."""

    def test_send_immediate(self) -> None:
        transport = MemoryTransport()
        message_logger = MemoryMessageLogger()
        mailer = ChannelMailer("primary", transport, message_logger=message_logger)
        message = build_message()

        recipients = mailer.send(message)

        assert recipients == 1
        assert transport.sent == [message]
        assert message_logger.get_messages() == [message]
        assert mailer.is_queued is False

    def test_send_queued_waits_for_flush(self) -> None:
        """Canal com spool só entrega no flush, mas registra no envio."""
        transport = MemoryTransport()
        message_logger = MemoryMessageLogger()
        mailer = ChannelMailer("bulk", transport, spool=MemorySpool(), message_logger=message_logger)

        mailer.send(build_message("a"))
        mailer.send(build_message("b"))

        assert transport.sent == []
        assert mailer.queued_count == 2
        assert message_logger.count_messages() == 2

        assert mailer.flush_queue() == 2
        assert [m["Subject"] for m in transport.sent] == ["a", "b"]
        assert mailer.queued_count == 0

    def test_flush_without_spool_is_noop(self) -> None:
        mailer = ChannelMailer("primary", MemoryTransport())
        assert mailer.flush_queue() == 0

    def test_send_fills_missing_headers(self) -> None:
        message = EmailMessage()
        message["To"] = "a@example.com"
        message.set_content("x")
        mailer = ChannelMailer("primary", MemoryTransport(), from_email="noreply@example.com")

        mailer.send(message)

        assert message["From"] == "noreply@example.com"
        assert message["Date"]
        assert message["Message-ID"].startswith("<")

    def test_send_keeps_existing_headers(self) -> None:
        message = build_message()
        message["Message-ID"] = "<fixo@example.com>"
        mailer = ChannelMailer("primary", MemoryTransport(), from_email="outro@example.com")

        mailer.send(message)

        assert message["From"] == "noreply@example.com"
        assert message["Message-ID"] == "<fixo@example.com>"

    def test_send_without_recipients_raises(self) -> None:
        """Mensagem sem destinatários não é registrada nem enviada."""
        transport = MemoryTransport()
        message_logger = MemoryMessageLogger()
        mailer = ChannelMailer("primary", transport, message_logger=message_logger)
        message = EmailMessage()
        message.set_content("x")

        with pytest.raises(InvalidMailMessageError):
            mailer.send(message)
        assert transport.sent == []
        assert message_logger.count_messages() == 0


class TestMemorySpool:
    """Testes do spool em memória."""

    def test_flush_delivers_in_queue_order(self) -> None:
        spool = MemorySpool()
        for subject in ("a", "b", "c"):
            spool.queue_message(build_message(subject))
        transport = MemoryTransport()

        assert spool.flush(transport) == 3
        assert [m["Subject"] for m in transport.sent] == ["a", "b", "c"]
        assert len(spool) == 0

    def test_failed_flush_keeps_remaining_messages(self) -> None:
        spool = MemorySpool()
        spool.queue_message(build_message("a"))
        spool.queue_message(build_message("b"))

        with pytest.raises(ConnectionError):
            spool.flush(_FailingTransport())

        assert len(spool) == 2

    def test_flush_empty_spool(self) -> None:
        assert MemorySpool().flush(MemoryTransport()) == 0


class TestTransports:
    """Testes dos transportes."""

    def test_logging_transport_logs_without_content(self, caplog: pytest.LogCaptureFixture) -> None:
        message = build_message(subject="assunto secreto")
        message["Message-ID"] = "<id-1@example.com>"

        with caplog.at_level(logging.INFO, logger="app.infra.mail.transports"):
            LoggingTransport(channel="primary").send(message)

        record = next(r for r in caplog.records if r.getMessage() == "mail_sent")
        assert record.channel == "primary"
        assert record.message_id == "<id-1@example.com>"
        assert record.part_count == 1
        assert "assunto secreto" not in caplog.text

    def test_null_transport_discards(self) -> None:
        assert NullTransport().send(build_message()) is None
