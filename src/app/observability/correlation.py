"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id chega pelo header `x-correlation-id` (ou é gerado) e é
injetado em logs. Usa ContextVar para ser thread/async-safe.

Uso:
    from app.observability import reset_correlation_id, set_correlation_id

    # Em middleware
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        # processar request
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

CORRELATION_ID_HEADER = "x-correlation-id"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ("" se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None ou vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Extrai correlation_id dos headers da requisição, se presente."""
    value = headers.get(CORRELATION_ID_HEADER, "").strip()
    return value or None
