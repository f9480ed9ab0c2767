import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.app.api.router import router as api_router
from backend.app.core.config import settings
from backend.app.core.logging_setup import setup_logging
from backend.services.errors import ConflictError, InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("404 %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=404, content={"detail": exc.detail})


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("409 %s %s: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=409, content={"detail": exc.detail})


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Pharmacie Centrale", version="0.1.0")
    app.include_router(api_router, prefix="/api")

    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(InvalidStateError, _conflict)
    return app


app = create_app()
