"""Log setup for the CLI and the API, with request IDs for HTTP traffic."""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
access_logger = logging.getLogger("windweibull.access")

# Record attributes copied into JSON output when a caller passes them as extra.
_REQUEST_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip")
_FIT_FIELDS = ("n_samples", "shape_k", "scale_c")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, tagged with the current request ID."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = request_id_var.get("")
        if rid:
            entry["request_id"] = rid

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        for key in _REQUEST_FIELDS + _FIT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        return json.dumps(entry, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with ``X-Request-ID`` and log its status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)

            response.headers["X-Request-ID"] = rid
            access_logger.info(
                "%s %s %d %.1fms [%s]",
                request.method, request.url.path, response.status_code, duration_ms, rid,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else "unknown",
                },
            )
            return response
        finally:
            request_id_var.reset(token)


def setup_logging(json_format: bool = False, level: int | str = logging.INFO) -> None:
    """Route all logging to stderr, keeping stdout free for fit results.

    Calling it again replaces the previous handler.
    """
    handler = logging.StreamHandler(sys.stderr)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
