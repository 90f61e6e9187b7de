"""Endpoints do profiler.

Endpoints:
- GET /_profiler: profiles mais recentes
- GET /_profiler/{token}: resumo de um profile
- GET /_profiler/{token}/mail: painel de email de um profile
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, Query, Request, status

from api.routes.profiler.mail_panel import MailPanelResponse, build_mail_panel
from app.observability import COLLECTOR_NAME, CollectorNotFoundError, MailMessageCollector

if TYPE_CHECKING:
    from app.observability.profiler import Profile, Profiler

router = APIRouter()


def _get_profiler(request: Request) -> Profiler:
    return request.app.state.profiler


def _get_profile(request: Request, token: str) -> Profile:
    profile = _get_profiler(request).store.read(token)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Token "{token}" not found.',
        )
    return profile


@router.get("/")
async def list_profiles(
    request: Request,
    limit: int = Query(default=10, ge=1, le=100),
) -> dict[str, Any]:
    """Lista profiles mais recentes primeiro."""
    profiles = _get_profiler(request).store.find(limit=limit)
    return {"profiles": [profile.summary() for profile in profiles]}


@router.get("/{token}")
async def get_profile(request: Request, token: str) -> dict[str, Any]:
    """Resumo de um profile (requisição, status e coletores)."""
    return _get_profile(request, token).summary()


@router.get("/{token}/mail", response_model=MailPanelResponse)
async def get_mail_panel(request: Request, token: str) -> MailPanelResponse:
    """Painel de email: canais, contagens e mensagens de um profile."""
    profile = _get_profile(request, token)
    try:
        collector = profile.get_collector(COLLECTOR_NAME)
    except CollectorNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if not isinstance(collector, MailMessageCollector):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Collector "{COLLECTOR_NAME}" is not a mail collector.',
        )
    return build_mail_panel(profile.token, collector)
