from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("app.errors")

INTERNAL_ERROR = "Interne serverfout"


class RelayError(Exception):
    """Base for failures that end a request with a JSON ``{"error": ...}`` body."""

    status_code = 500
    message = INTERNAL_ERROR

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingFileError(RelayError):
    status_code = 400
    message = "Geen bestand geüpload."


class StorageError(RelayError):
    message = "Upload naar Cloudinary mislukt."


class PersistenceError(RelayError):
    message = "Opslaan van document mislukt."


class ListingError(PersistenceError):
    message = "Kon documenten niet ophalen."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def _relay_error(request: Request, exc: RelayError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        log.info("Ongeldig verzoek op %s: %s", request.url.path, exc.errors())
        return error_response(400, "Ongeldig verzoek.")
