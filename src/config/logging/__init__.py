"""Configuração de logging estruturado do Carteiro.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/bootstrap)
    configure_logging(level="INFO", service_name="carteiro")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("mail_collected", extra={"channel_count": 2})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Logs nunca carregam conteúdo de emails (assunto, corpo, destinatários).
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import (
    EMAIL_MASK,
    MAIL_CONTENT_FIELDS,
    CorrelationIdFilter,
    MailContentFilter,
    mask_email_addresses,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    PLAIN_LOG_FORMAT,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_plain_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "PLAIN_LOG_FORMAT",
    "REQUIRED_LOG_FIELDS",
    # Filters
    "EMAIL_MASK",
    "MAIL_CONTENT_FIELDS",
    "CorrelationIdFilter",
    "MailContentFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "create_plain_formatter",
    "get_logger",
    "log_fallback",
    "mask_email_addresses",
]
