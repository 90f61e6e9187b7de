"""Middleware do profiler.

Para cada requisição (exceto as do próprio profiler):
1. Define correlation_id (header x-correlation-id ou novo UUID)
2. Abre os escopos por requisição do profiler (ex: captura de emails)
3. Executa a rota
4. Executa o profiler dentro do mesmo escopo e devolve o token no
   header X-Debug-Token

Falhas do profiler nunca afetam a resposta: são apenas registradas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from app.observability import (
    correlation_id_from_headers,
    reset_correlation_id,
    set_correlation_id,
)
from config.logging import log_fallback

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from app.observability.profiler import Profile, Profiler

logger = logging.getLogger(__name__)

DEBUG_TOKEN_HEADER = "X-Debug-Token"
PROFILER_PATH_PREFIX = "/_profiler"


class ProfilerMiddleware(BaseHTTPMiddleware):
    """Executa o profiler ao fim de cada requisição."""

    def __init__(self, app: ASGIApp, profiler: Profiler) -> None:
        super().__init__(app)
        self._profiler = profiler

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = set_correlation_id(correlation_id_from_headers(request.headers))
        try:
            if not self._profiler.enabled or request.url.path.startswith(PROFILER_PATH_PREFIX):
                return await call_next(request)

            with self._profiler.request_scope():
                try:
                    response = await call_next(request)
                except Exception as exc:
                    self._collect_safely(request, None, exc)
                    raise

                profile = self._collect_safely(request, response, None)
            if profile is not None:
                response.headers[DEBUG_TOKEN_HEADER] = profile.token
            return response
        finally:
            reset_correlation_id(token)

    def _collect_safely(
        self,
        request: Request,
        response: Response | None,
        exception: BaseException | None,
    ) -> Profile | None:
        try:
            return self._profiler.collect(request, response, exception)
        except Exception:
            logger.exception("profiler_collect_failed", extra={"path": request.url.path})
            log_fallback(logger, "profiler", reason="collect_failed")
            return None
