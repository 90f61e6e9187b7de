"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_mail_subsystem, get_profiler

    # Na inicialização do serviço
    initialize_app()

    mailer = get_mail_subsystem().get_mailer()
    profiler = get_profiler()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_mail_settings

# Nome do serviço para logs e métricas
SERVICE_NAME = "carteiro"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação (logging JSON com correlation_id).

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes.

    Configura logging em nível DEBUG sem JSON para facilitar debug.
    """
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
        json_format=False,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"mail: {error}" for error in get_mail_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_mail_subsystem():
    """Obtém subsistema de email (singleton).

    Returns:
        MailSubsystem configurado conforme env
    """
    from app.bootstrap.dependencies import create_mail_subsystem
    return create_mail_subsystem(get_mail_settings())


@lru_cache(maxsize=1)
def get_profiler():
    """Obtém profiler (singleton).

    Returns:
        Profiler com coletores registrados
    """
    from app.bootstrap.dependencies import create_profiler
    return create_profiler(get_base_settings(), get_mail_subsystem())
