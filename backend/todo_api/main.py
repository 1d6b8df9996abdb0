import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import Settings, settings as default_settings
from .core.errors import StorageUnavailable
from .core.logging_setup import setup_logging
from .db.session import Database
from .api.v1 import health, todos

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.state.db = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    app.include_router(health.router, prefix=settings.API_V1_PREFIX)
    app.include_router(todos.router, prefix=settings.API_V1_PREFIX)

    @app.exception_handler(StorageUnavailable)
    def storage_unavailable(request: Request, exc: StorageUnavailable):
        logger.error("Storage unavailable on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": "storage unavailable"})

    @app.on_event("startup")
    def on_startup():
        app.state.db.open()

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.db.close()

    return app


app = create_app()


def serve() -> None:
    import uvicorn
    uvicorn.run("todo_api.main:app", host="0.0.0.0", port=8000)
