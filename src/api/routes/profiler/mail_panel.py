"""Painel de email do profiler: conversão do coletor para JSON.

Usa apenas os acessores públicos do MailMessageCollector, do mesmo modo
que a UI do profiler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from email.message import EmailMessage

    from app.observability.mail_collector import MailMessageCollector


class AttachmentView(BaseModel):
    """Anexo de uma mensagem."""

    filename: str | None = Field(default=None, description="Nome do arquivo anexado.")
    content_type: str = Field(..., description="Tipo MIME do anexo.")
    size: int = Field(default=0, ge=0, description="Tamanho decodificado em bytes.")


class MessageView(BaseModel):
    """Mensagem registrada por um canal."""

    message_id: str = ""
    subject: str = ""
    sender: str = ""
    to: list[str] = Field(default_factory=list)
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    date: str = ""
    content_type: str = ""
    body: str | None = None
    attachments: list[AttachmentView] = Field(default_factory=list)


class ChannelView(BaseModel):
    """Dados de um canal no profile."""

    name: str
    message_count: int = Field(..., ge=0)
    is_queued: bool
    is_default: bool
    messages: list[MessageView] = Field(default_factory=list)


class MailPanelResponse(BaseModel):
    """Resposta do painel de email de um profile."""

    token: str
    collector: str
    message_count: int = Field(..., ge=0)
    channels: list[ChannelView] = Field(default_factory=list)


def _header_values(message: EmailMessage, name: str) -> list[str]:
    return [str(value) for value in message.get_all(name, [])]


def _body_text(message: EmailMessage) -> str | None:
    body = message.get_body(preferencelist=("plain", "html"))
    if body is None:
        return None
    return body.get_content()


def build_attachment_view(part: EmailMessage) -> AttachmentView:
    payload = part.get_payload(decode=True)
    return AttachmentView(
        filename=part.get_filename(),
        content_type=part.get_content_type(),
        size=len(payload) if isinstance(payload, bytes) else 0,
    )


def build_message_view(collector: MailMessageCollector, message: EmailMessage) -> MessageView:
    return MessageView(
        message_id=str(message.get("Message-ID", "")),
        subject=str(message.get("Subject", "")),
        sender=str(message.get("From", "")),
        to=_header_values(message, "To"),
        cc=_header_values(message, "Cc"),
        bcc=_header_values(message, "Bcc"),
        date=str(message.get("Date", "")),
        content_type=message.get_content_type(),
        body=_body_text(message),
        attachments=[build_attachment_view(part) for part in collector.extract_attachments(message)],
    )


def build_mail_panel(token: str, collector: MailMessageCollector) -> MailPanelResponse:
    """Monta o painel de email a partir do coletor de um profile."""
    channels = [
        ChannelView(
            name=name,
            message_count=collector.get_message_count(name),
            is_queued=collector.is_queued(name),
            is_default=collector.is_default_channel(name),
            messages=[build_message_view(collector, message) for message in collector.get_messages(name)],
        )
        for name in collector.get_channel_names()
    ]
    return MailPanelResponse(
        token=token,
        collector=collector.get_name(),
        message_count=collector.get_message_count(),
        channels=channels,
    )
