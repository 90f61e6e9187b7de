"""Testes do endpoint POST /mail/send."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.routes.mail.router import SendMailRequest, build_email_message
from app.app import create_app
from app.infra.mail import MailSubsystem, MemoryTransport
from app.observability import MemoryProfileStore, Profiler


@pytest.fixture
def client(mail_subsystem: MailSubsystem) -> TestClient:
    profiler = Profiler([], MemoryProfileStore(), enabled=False)
    return TestClient(create_app(mail_subsystem=mail_subsystem, profiler=profiler))


class TestBuildEmailMessage:
    """Testes da conversão do payload em EmailMessage."""

    def test_headers_and_body(self) -> None:
        payload = SendMailRequest(
            sender="loja@example.com",
            to=["a@example.com", "b@example.com"],
            cc=["c@example.com"],
            subject="Pedido",
            body="Seu pedido chegou",
        )

        message = build_email_message(payload)

        assert message["From"] == "loja@example.com"
        assert message["To"] == "a@example.com, b@example.com"
        assert message["Cc"] == "c@example.com"
        assert message["Bcc"] is None
        assert message.get_content().strip() == "Seu pedido chegou"

    def test_attachments(self) -> None:
        payload = SendMailRequest(
            to=["a@example.com"],
            attachments=[{"filename": "nota.csv", "content": "a;b", "content_type": "text/csv"}],
        )

        message = build_email_message(payload)

        attachments = [part for part in message.iter_attachments()]
        assert [part.get_filename() for part in attachments] == ["nota.csv"]
        assert attachments[0].get_content_type() == "text/csv"


class TestSendMailRoute:
    """Testes do envio via HTTP."""

    def test_send_on_default_channel(
        self, client: TestClient, transports: dict[str, MemoryTransport]
    ) -> None:
        response = client.post("/mail/send", json={"to": ["a@example.com"], "subject": "Oi"})

        assert response.status_code == 202
        body = response.json()
        assert body["channel"] == "primary"
        assert body["recipients"] == 1
        assert body["queued"] is False
        assert body["message_id"].startswith("<")
        assert [m["Subject"] for m in transports["primary"].sent] == ["Oi"]

    def test_send_on_spool_channel_is_flushed_after_response(
        self, client: TestClient, transports: dict[str, MemoryTransport]
    ) -> None:
        """Canal com spool entrega depois da resposta, pelo middleware."""
        response = client.post(
            "/mail/send",
            json={"channel": "secondary", "to": ["a@example.com", "b@example.com"], "bcc": ["c@example.com"]},
        )

        assert response.status_code == 202
        assert response.json()["queued"] is True
        assert response.json()["recipients"] == 3
        assert len(transports["secondary"].sent) == 1

    def test_unknown_channel_returns_404(self, client: TestClient) -> None:
        response = client.post("/mail/send", json={"channel": "nope", "to": ["a@example.com"]})

        assert response.status_code == 404
        assert response.json()["detail"] == 'Canal de email não configurado: "nope"'

    def test_empty_recipients_rejected(self, client: TestClient) -> None:
        response = client.post("/mail/send", json={"to": []})
        assert response.status_code == 422

    def test_blank_recipient_rejected_by_mailer(self, client: TestClient) -> None:
        response = client.post("/mail/send", json={"to": [""]})
        assert response.status_code == 422
        assert "destinatários" in response.json()["detail"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"to": ["a@example.com"], "subject": "oi\nBcc: x@evil.com"},
            {"to": ["a@example.com\r\nBcc: x@evil.com"]},
            {"to": ["a@example.com"], "cc": ["b@example.com\nX-Extra: 1"]},
            {"to": ["a@example.com"], "sender": "eu@example.com\rBcc: x@evil.com"},
            {"to": ["a@example.com"], "attachments": [{"filename": "a.txt\nX-Extra: 1"}]},
        ],
    )
    def test_line_break_in_header_rejected(
        self, client: TestClient, payload: dict, transports: dict[str, MemoryTransport]
    ) -> None:
        response = client.post("/mail/send", json=payload)

        assert response.status_code == 422
        assert all(transport.sent == [] for transport in transports.values())

    def test_header_value_error_maps_to_422(self, client: TestClient, monkeypatch) -> None:
        def _broken_build(payload: SendMailRequest) -> None:
            raise ValueError("cabeçalho inválido")

        monkeypatch.setattr("api.routes.mail.router.build_email_message", _broken_build)

        response = client.post("/mail/send", json={"to": ["a@example.com"]})

        assert response.status_code == 422
        assert response.json()["detail"] == "cabeçalho inválido"
