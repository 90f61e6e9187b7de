"""Testes do MemoryMessageLogger."""

from __future__ import annotations

import asyncio

import pytest

from app.infra.mail import MemoryMessageLogger, message_capture
from tests.fakes.fake_mail import build_message


class TestMemoryMessageLogger:
    """Testes do logger de mensagens em memória."""

    def test_starts_empty(self) -> None:
        message_logger = MemoryMessageLogger()
        assert message_logger.get_messages() == []
        assert message_logger.count_messages() == 0
        assert message_logger.max_messages == 0

    def test_records_in_order(self) -> None:
        messages = [build_message(f"m{i}") for i in range(3)]
        message_logger = MemoryMessageLogger()
        for message in messages:
            message_logger.record(message)

        assert message_logger.get_messages() == messages
        assert message_logger.count_messages() == 3

    def test_cap_keeps_latest_but_counts_all(self) -> None:
        """Com limite, guarda só as últimas N mas conta todos os envios."""
        message_logger = MemoryMessageLogger(max_messages=2)
        for i in range(5):
            message_logger.record(build_message(f"m{i}"))

        assert [m["Subject"] for m in message_logger.get_messages()] == ["m3", "m4"]
        assert message_logger.count_messages() == 5

    def test_get_messages_returns_copy(self) -> None:
        message_logger = MemoryMessageLogger()
        message_logger.record(build_message())
        message_logger.get_messages().clear()
        assert len(message_logger.get_messages()) == 1

    def test_clear_resets_messages_and_count(self) -> None:
        message_logger = MemoryMessageLogger()
        message_logger.record(build_message())
        message_logger.clear()

        assert message_logger.get_messages() == []
        assert message_logger.count_messages() == 0

    def test_negative_cap_raises(self) -> None:
        with pytest.raises(ValueError, match="max_messages"):
            MemoryMessageLogger(max_messages=-1)


class TestMessageCapture:
    """Leituras dentro de message_capture() enxergam só a captura atual."""

    def test_capture_sees_only_its_own_messages(self) -> None:
        message_logger = MemoryMessageLogger()
        message_logger.record(build_message("antes"))

        with message_capture():
            assert message_logger.get_messages() == []
            assert message_logger.count_messages() == 0
            message_logger.record(build_message("dentro"))
            assert [m["Subject"] for m in message_logger.get_messages()] == ["dentro"]
            assert message_logger.count_messages() == 1

        assert [m["Subject"] for m in message_logger.get_messages()] == ["antes", "dentro"]
        assert message_logger.count_messages() == 2

    def test_capture_respects_cap(self) -> None:
        message_logger = MemoryMessageLogger(max_messages=1)
        with message_capture():
            for i in range(3):
                message_logger.record(build_message(f"m{i}"))

            assert [m["Subject"] for m in message_logger.get_messages()] == ["m2"]
            assert message_logger.count_messages() == 3

    def test_nested_capture_restores_outer(self) -> None:
        message_logger = MemoryMessageLogger()
        with message_capture():
            message_logger.record(build_message("externa"))
            with message_capture():
                assert message_logger.count_messages() == 0
            assert message_logger.count_messages() == 1

    @pytest.mark.asyncio
    async def test_concurrent_tasks_do_not_share_capture(self) -> None:
        message_logger = MemoryMessageLogger()

        async def _request(subject: str) -> list[str]:
            with message_capture():
                message_logger.record(build_message(subject))
                await asyncio.sleep(0)
                return [m["Subject"] for m in message_logger.get_messages()]

        results = await asyncio.gather(*(_request(f"r{i}") for i in range(5)))

        assert results == [[f"r{i}"] for i in range(5)]
        assert message_logger.count_messages() == 5
