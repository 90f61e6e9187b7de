"""Endpoints de health check e readiness."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from app.infra.mail import MailSubsystem
    from app.observability.profiler import Profiler

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "carteiro"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


class DependencyCheck(BaseModel):
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    detail: dict[str, Any] = {}
    errors: list[str] = []


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: settings de email válidas e subsistema disponível."""
    mail_check = _check_mail(getattr(request.app.state, "mail_subsystem", None))
    profiler_check = _check_profiler(getattr(request.app.state, "profiler", None))

    ready = mail_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "mail": mail_check.model_dump(),
            "profiler": profiler_check.model_dump(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if not ready:
        logger.warning("readiness_failed", extra={"component": "health", "checks": payload["checks"]})
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_mail(mail_subsystem: MailSubsystem | None) -> DependencyCheck:
    if mail_subsystem is None:
        return DependencyCheck(status="failed", errors=["mail_subsystem_not_configured"])

    errors = mail_subsystem.settings.validate()
    detail = {
        "initialized": mail_subsystem.is_initialized(),
        "channels": mail_subsystem.registry.channel_names(),
        "default_channel": mail_subsystem.default_channel,
    }
    return DependencyCheck(status="failed" if errors else "ok", detail=detail, errors=errors)


def _check_profiler(profiler: Profiler | None) -> DependencyCheck:
    # Profiler é opcional: ausência só degrada
    if profiler is None or not profiler.enabled:
        return DependencyCheck(status="degraded", detail={"enabled": False})
    return DependencyCheck(
        status="ok",
        detail={"enabled": True, "stored_profiles": len(profiler.store)},
    )
