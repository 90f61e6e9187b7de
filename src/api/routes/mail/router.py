"""Endpoint de envio de email por canal.

Endpoints:
- POST /mail/send: monta mensagem de texto (com anexos opcionais) e envia
  pelo canal informado (ou pelo canal padrão)
"""

from __future__ import annotations

from email.message import EmailMessage
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field, field_validator

from app.infra.mail import InvalidMailMessageError, UnknownMailChannelError

if TYPE_CHECKING:
    from app.infra.mail import MailSubsystem

router = APIRouter()


def _reject_line_breaks(value: str) -> str:
    if "\r" in value or "\n" in value:
        raise ValueError("Quebra de linha não permitida em cabeçalho")
    return value


class AttachmentIn(BaseModel):
    """Anexo de texto enviado junto da mensagem."""

    filename: str = Field(..., min_length=1, description="Nome do arquivo.")
    content: str = Field(default="", description="Conteúdo textual do anexo.")
    content_type: str = Field(
        default="text/plain",
        pattern=r"^[\w.+-]+/[\w.+-]+$",
        description="Tipo MIME do anexo.",
    )

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, value: str) -> str:
        """Nome vai para Content-Disposition; não aceita quebra de linha."""
        return _reject_line_breaks(value)


class SendMailRequest(BaseModel):
    """Mensagem a enviar."""

    channel: str | None = Field(default=None, description="Canal; usa o padrão se omitido.")
    sender: str | None = Field(default=None, description="Remetente (From).")
    to: list[str] = Field(..., min_length=1, description="Destinatários.")
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    subject: str = ""
    body: str = ""
    attachments: list[AttachmentIn] = Field(default_factory=list)

    @field_validator("sender", "subject")
    @classmethod
    def validate_header_text(cls, value: str | None) -> str | None:
        """Valores viram cabeçalhos; CR/LF permitiria injetar cabeçalhos."""
        if value is None:
            return value
        return _reject_line_breaks(value)

    @field_validator("to", "cc", "bcc")
    @classmethod
    def validate_addresses(cls, value: list[str]) -> list[str]:
        for address in value:
            _reject_line_breaks(address)
        return value


class SendMailResponse(BaseModel):
    """Resultado do envio."""

    channel: str
    message_id: str
    recipients: int
    queued: bool


def build_email_message(payload: SendMailRequest) -> EmailMessage:
    """Converte o payload da API em EmailMessage."""
    message = EmailMessage()
    if payload.sender:
        message["From"] = payload.sender
    message["To"] = ", ".join(payload.to)
    if payload.cc:
        message["Cc"] = ", ".join(payload.cc)
    if payload.bcc:
        message["Bcc"] = ", ".join(payload.bcc)
    message["Subject"] = payload.subject
    message.set_content(payload.body)

    for attachment in payload.attachments:
        maintype, subtype = attachment.content_type.split("/", 1)
        message.add_attachment(
            attachment.content.encode("utf-8"),
            maintype=maintype,
            subtype=subtype,
            filename=attachment.filename,
        )
    return message


@router.post("/send", response_model=SendMailResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_mail(request: Request, payload: SendMailRequest) -> SendMailResponse:
    """Envia (ou enfileira) uma mensagem pelo canal."""
    subsystem: MailSubsystem = request.app.state.mail_subsystem

    try:
        mailer = subsystem.get_mailer(payload.channel)
    except UnknownMailChannelError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    try:
        message = build_email_message(payload)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        recipients = mailer.send(message)
    except InvalidMailMessageError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    return SendMailResponse(
        channel=mailer.name,
        message_id=str(message["Message-ID"]),
        recipients=recipients,
        queued=mailer.is_queued,
    )
