import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.routes_documents import router as documents_router
from app.api.routes_upload import router as upload_router
from app.core.config import Settings, get_settings
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging
from app.db.store import DocumentStore
from app.middleware.errors import CatchAllExceptionMiddleware
from app.middleware.request_log import RequestLogMiddleware
from app.services.cdn import CloudinaryStorage

log = logging.getLogger("app.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.store = DocumentStore(settings.resolved_database_url, echo=settings.db_echo)
    app.state.storage = CloudinaryStorage(
        settings.cloudinary_cloud_name,
        settings.cloudinary_api_key,
        settings.cloudinary_api_secret,
    )
    log.info("Server draait op http://localhost:%s", settings.port)
    try:
        yield
    finally:
        await app.state.store.dispose()
        log.info("Databaseverbinding gesloten")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Inschrijvingen upload", lifespan=lifespan)
    app.state.settings = settings

    # added last = outermost, so CORS headers land on error responses too
    app.add_middleware(CatchAllExceptionMiddleware)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "Hello from FastAPI with Cloudinary!"

    app.include_router(upload_router)
    app.include_router(documents_router)
    return app


app = create_app()
