"""Rotas HTTP da API.

Estrutura:
- routes/health/: health checks e readiness
- routes/mail/: envio de email por canal
- routes/profiler/: consulta de profiles e painel de email

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
