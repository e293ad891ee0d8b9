"""
Confession Board — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance holding its own Database, PasswordHasher and Settings on
       `app.state`.
Who:   uvicorn imports `confession_board.main:app`; tests call create_app()
       with their own settings.

Lifecycle:
    Startup:
    1. Initialize logging
    2. Wait for the database (tenacity backoff); abort startup if it never answers
    3. Log the listening address

    Shutdown:
    1. Dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from confession_board import __version__
from confession_board.config import Settings, get_settings
from confession_board.database import Database, wait_for_database
from confession_board.exceptions import (
    GENERIC_MESSAGE,
    AuthenticationError,
    ConfessionBoardError,
    DatabaseError,
    NotFoundError,
)
from confession_board.middleware.logging import RequestLoggingMiddleware
from confession_board.middleware.request_id import RequestIDMiddleware, request_id_var
from confession_board.routes import auth, confessions, health, root
from confession_board.security import PasswordHasher

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes collect it from there)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then block until the database answers.
    Shutdown: dispose the connection pool.

    If the database stays unreachable after every attempt the exception
    propagates and uvicorn refuses to start serving.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Confession Board %s starting up...", __version__)

    logger.info("Attempting to connect to db")
    await wait_for_database(database, settings)
    logger.info("Connected to db!")

    logger.info(
        "Server started listening for HTTP requests on %s:%d",
        settings.host,
        settings.port,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Confession Board shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to responses.

    Handler hierarchy:
        AuthenticationError   → 401 {"message": <reason>}
        NotFoundError         → 404 {"message": ...}
        DatabaseError         → 500 {"message": "An error occurred"} or plain text
        ConfessionBoardError  → 500 {"message": "An error occurred"}
        Exception (fallback)  → 500 {"message": "An error occurred"}

    Exception context and tracebacks are logged, never returned.
    """

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.info("[%s] Authentication rejected: %s", rid, exc.message)
        return JSONResponse(status_code=401, content={"message": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        if exc.plain_text:
            return PlainTextResponse(exc.message, status_code=500)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(ConfessionBoardError)
    async def handle_app_error(request: Request, exc: ConfessionBoardError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": GENERIC_MESSAGE})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"message": GENERIC_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded
                  settings from get_settings().

    Returns:
        FastAPI instance with its own connection pool on app.state.database.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Confession Board API",
        description="User registration/login and an anonymous confessions board with votes.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(confessions.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `confession_board.main:app` to be importable
app = create_app()
