import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

log = logging.getLogger("app.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = uuid.uuid4().hex[:12]
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            "%s %s -> %d in %dms (request_id=%s, content_length=%s)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
            request.headers.get("content-length"),
        )
        response.headers["X-Request-ID"] = request_id
        return response
