"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.mail.router import router as mail_router
from api.routes.profiler.router import router as profiler_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Envio de email
    api_router.include_router(mail_router, prefix="/mail", tags=["mail"])

    # Profiler
    api_router.include_router(profiler_router, prefix="/_profiler", tags=["profiler"])

    return api_router
