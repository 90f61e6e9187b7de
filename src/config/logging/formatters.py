"""Formatters de logging.

Dois formatos disponíveis:
- JSON estruturado (produção/staging), com campos obrigatórios
- Texto simples (testes e desenvolvimento local)

Os campos correlation_id e service são injetados pelo CorrelationIdFilter.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

# Mapeamento de nomes de campos para formato padrão
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

PLAIN_LOG_FORMAT = "%(asctime)s %(levelname)s [%(service)s] %(name)s [%(correlation_id)s] %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Returns:
        JsonFormatter configurado para logs estruturados.

    Exemplo de output:
        {
            "asctime": "2026-10-17T10:30:00",
            "level": "INFO",
            "logger": "app.observability.mail_collector",
            "message": "mail_collected",
            "correlation_id": "abc-123",
            "service": "carteiro"
        }
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_plain_formatter() -> logging.Formatter:
    """Cria formatter de texto simples (legível no terminal)."""
    return logging.Formatter(PLAIN_LOG_FORMAT)
