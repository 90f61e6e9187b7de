"""Entrypoint da aplicação Carteiro.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI) com o
profiler por requisição e o painel de email.

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.middleware import MailSpoolFlushMiddleware, ProfilerMiddleware
from api.routes import create_api_router
from app.bootstrap import (
    get_mail_subsystem,
    get_profiler,
    initialize_app,
    validate_runtime_settings,
)
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.infra.mail import MailSubsystem
    from app.observability.profiler import Profiler

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações

    Shutdown:
    - Entrega mensagens ainda enfileiradas nos spools
    """
    logger.info("app_starting", extra={"service": "carteiro"})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": "carteiro"})
    sent = app.state.mail_subsystem.flush_spools()
    if sent:
        logger.info("spool_flushed_on_shutdown", extra={"sent_count": sent})


def create_app(
    mail_subsystem: MailSubsystem | None = None,
    profiler: Profiler | None = None,
) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        mail_subsystem: Subsistema de email. Usa o singleton do bootstrap se None.
        profiler: Profiler. Usa o singleton do bootstrap se None.

    Returns:
        Aplicação FastAPI configurada.
    """
    mail_subsystem = mail_subsystem or get_mail_subsystem()
    profiler = profiler or get_profiler()

    fastapi_app = FastAPI(
        title="Carteiro",
        description="Envio de email por canal com profiler de atividade por requisição",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.mail_subsystem = mail_subsystem
    fastapi_app.state.profiler = profiler

    # Ordem: o último middleware adicionado é o mais externo.
    # O flush do spool roda depois que o profiler coletou.
    fastapi_app.add_middleware(ProfilerMiddleware, profiler=profiler)
    fastapi_app.add_middleware(MailSpoolFlushMiddleware, mail_subsystem=mail_subsystem)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info(
        "app_configured",
        extra={"service": "carteiro", "profiler_enabled": profiler.enabled},
    )

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Carteiro in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
