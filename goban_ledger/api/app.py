"""
FastAPI application factory.

Owns the engine and session factory for the lifetime of the app, sets up CORS
and turns every error (LedgerError, payload validation, anything unexpected) into an `{"error": ...}` body.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from goban_ledger.api.routes import router
from goban_ledger.core.config import Settings, get_settings
from goban_ledger.core.exceptions import LedgerError
from goban_ledger.db.database import build_engine, build_session_factory, create_tables

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    owns_engine = engine is None
    if engine is None:
        engine = build_engine(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_tables(engine)
        logger.info("Database ready on %s", engine.url.render_as_string())
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(title="Goban Ledger API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )

    # Registered after CORSMiddleware, so it wraps it.
    @app.middleware("http")
    async def empty_preflight_reply(request: Request, call_next):
        """CORSMiddleware answers an accepted pre-flight with `200 OK` text. Clients get `204` without a body."""
        response = await call_next(request)
        if request.method == "OPTIONS" and response.status_code == 200:
            headers = {
                key: value
                for key, value in response.headers.items()
                if key not in ("content-length", "content-type")
            }
            return Response(status_code=204, headers=headers)
        return response

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid data."})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s crashed", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error."})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(router)
    return app
