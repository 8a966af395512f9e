# -*- coding: utf-8 -*-
"""
app/shared/middleware/request_logging.py

Middleware para logging de requests HTTP con método, path, status y duración.
Las rutas de transacciones agregan `tx=<id>` para correlacionar con los
logs del coordinador.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Callable, List, Optional, Pattern

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .exception_handler import get_request_id

logger = logging.getLogger(__name__)

_TRANSACTION_PATH = re.compile(r"^/payments/(?:admin/)?transactions/([^/]+)")


def transaction_id_from_path(path: str) -> Optional[str]:
    match = _TRANSACTION_PATH.match(path)
    return match.group(1) if match else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Loguea el fin de cada request con su duración.

    Args:
        app: ASGI app
        exclude_patterns: regex a excluir (default: health y scraping de métricas)
    """

    DEFAULT_EXCLUDE = [
        re.compile(r"^/health"),
        re.compile(r"^/payments/metrics"),
        re.compile(r"^/favicon\.ico"),
    ]

    def __init__(self, app, exclude_patterns: Optional[List[Pattern]] = None):
        super().__init__(app)
        self.exclude_patterns = exclude_patterns or self.DEFAULT_EXCLUDE

    def _should_log(self, path: str) -> bool:
        return not any(pattern.match(path) for pattern in self.exclude_patterns)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not self._should_log(path):
            return await call_next(request)

        request_id = getattr(request.state, "request_id", None)
        if not request_id:
            request_id = get_request_id(request)
            request.state.request_id = request_id

        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "request_completed request_id=%s method=%s path=%s status=%d duration_ms=%.2f tx=%s",
                request_id,
                request.method,
                path,
                status,
                duration_ms,
                transaction_id_from_path(path) or "-",
            )


__all__ = ["RequestLoggingMiddleware", "transaction_id_from_path"]
