"""Middleware que entrega mensagens enfileiradas após a resposta.

Canais em modo spool só enviam depois que a requisição terminou; o
coletor do profiler ainda vê essas mensagens como enfileiradas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.infra.mail import MailSubsystem

logger = logging.getLogger(__name__)


class MailSpoolFlushMiddleware(BaseHTTPMiddleware):
    """Executa flush dos spools de email ao fim de cada requisição."""

    def __init__(self, app: ASGIApp, mail_subsystem: MailSubsystem) -> None:
        super().__init__(app)
        self._mail_subsystem = mail_subsystem

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        try:
            sent = self._mail_subsystem.flush_spools()
        except Exception:
            logger.exception("spool_flush_failed", extra={"component": "mail"})
        else:
            if sent:
                logger.info("spool_flushed", extra={"component": "mail", "sent_count": sent})
        return response
