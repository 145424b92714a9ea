import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.core.errors import INTERNAL_ERROR, error_response

log = logging.getLogger("app.errors")


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    """Last line of defence: any unhandled exception becomes a generic 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            log.error(
                "Fout bij verwerking van %s %s: %s: %s",
                request.method,
                request.url.path,
                type(exc).__name__,
                exc,
                exc_info=True,
            )
            return error_response(500, INTERNAL_ERROR)
