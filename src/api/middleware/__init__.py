"""Middlewares HTTP: profiler e flush de spool de email."""

from __future__ import annotations

from api.middleware.profiler import DEBUG_TOKEN_HEADER, PROFILER_PATH_PREFIX, ProfilerMiddleware
from api.middleware.spool_flush import MailSpoolFlushMiddleware

__all__ = [
    "DEBUG_TOKEN_HEADER",
    "PROFILER_PATH_PREFIX",
    "MailSpoolFlushMiddleware",
    "ProfilerMiddleware",
]
