"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..app import StoreApp
from ..domain.exceptions import MatchdayError
from . import player, store

logger = logging.getLogger(__name__)


def create_app(store_app: StoreApp) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await store_app.init_backend()
        yield
        await store_app.close()

    app = FastAPI(title="Matchday Store", debug=store_app.config.http.debug, lifespan=lifespan)
    app.state.store = store_app

    @app.exception_handler(MatchdayError)
    async def matchday_error_handler(request: Request, exc: MatchdayError):
        if exc.status_code >= 500:
            logger.error("Request %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
            return JSONResponse(status_code=exc.status_code, content={"error": "Server error"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok", "storage": store_app.config.storage.backend}

    app.include_router(store.router)
    app.include_router(player.router)
    return app
