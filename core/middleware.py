"""
Middleware: request logging with timing and request ids, plus recovery from
unhandled route errors so failed requests are still logged and tagged.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one access event per request and tags the response with
    X-Request-ID and X-Response-Time-Ms. Slow requests are logged as warnings.
    An exception escaping the route becomes a generic 500 here, inside the timing window.
    """

    def __init__(self, app: ASGIApp, logger: logging.Logger, slow_request_ms: float = 500.0) -> None:
        super().__init__(app)
        self.logger = logger
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                "unhandled_exception",
                extra={"request_id": request_id, "path": request.url.path, "method": request.method},
            )
            response = JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        fields = {
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client": request.client.host if request.client else "unknown",
        }
        if duration_ms > self.slow_request_ms:
            self.logger.warning("slow_request", extra=fields)
        else:
            self.logger.info("request", extra=fields)
        return response
