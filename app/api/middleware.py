"""Request logging middleware: one structured line per request, plus request counter."""
import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings
from app.utils.metrics import http_requests_total

logger = logging.getLogger(__name__)

UNMATCHED_PATH_LABEL = "unmatched"


def route_label(request: Request) -> str:
    """Route template (e.g. /images/generate) so metric labels stay bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH_LABEL


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(settings.request_id_header) or uuid4().hex
        start = time.monotonic()
        response = await call_next(request)
        latency_ms = round((time.monotonic() - start) * 1000, 1)
        response.headers[settings.request_id_header] = request_id
        http_requests_total.labels(path=route_label(request), status_code=str(response.status_code)).inc()
        logger.info(
            "http_request",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "latency_ms": latency_ms,
            },
        )
        return response
