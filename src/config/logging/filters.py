"""Filters de logging para injeção de contexto e proteção de conteúdo.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: carteiro)

Conteúdo de email (assunto, corpo, endereços) nunca chega aos handlers:
o MailContentFilter remove esses campos de `extra` e mascara endereços
de email na mensagem.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from re import Pattern
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

# Campos de `extra` que carregam conteúdo de mensagens
MAIL_CONTENT_FIELDS: Final[frozenset[str]] = frozenset(
    {"subject", "body", "sender", "to", "cc", "bcc", "recipients", "attachments"}
)

EMAIL_MASK: Final = "[EMAIL]"

_EMAIL_PATTERN: Final[Pattern[str]] = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        Nunca filtra: sempre retorna True.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class MailContentFilter(logging.Filter):
    """Remove conteúdo de email dos records antes da formatação.

    Nunca descarta o record, apenas o limpa.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for field in MAIL_CONTENT_FIELDS:
            if field in record.__dict__:
                delattr(record, field)

        if isinstance(record.msg, str):
            record.msg = mask_email_addresses(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_mask_arg(arg) for arg in record.args)
        elif isinstance(record.args, Mapping):
            # logger.info("para %(to)s", {"to": ...}) chega como mapping
            record.args = {key: _mask_arg(value) for key, value in record.args.items()}
        return True


def _mask_arg(arg: object) -> object:
    return mask_email_addresses(arg) if isinstance(arg, str) else arg


def mask_email_addresses(text: str) -> str:
    """Substitui endereços de email por EMAIL_MASK.

    >>> mask_email_addresses("falha ao enviar para ana@example.com")
    'falha ao enviar para [EMAIL]'
    """
    return _EMAIL_PATTERN.sub(EMAIL_MASK, text)
