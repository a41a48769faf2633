import os
import json
import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("vedic_chart.requests")

REQUEST_ID_HEADER = "X-Request-ID"


def logging_enabled() -> bool:
    return os.getenv("LOGGING_ENABLED", "false").lower() == "true"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag every response with a request id and, when enabled, log one JSON line per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        if not logging_enabled():
            return response

        record = {
            "request_id": request_id,
            "client": request.client.host if request.client else None,
            "method": request.method,
            "path": request.url.path,
            "planet": request.query_params.get("planet"),
            "status": response.status_code,
            "latency_ms": round((time.perf_counter() - started) * 1000, 2),
        }
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, json.dumps(record))
        return response
