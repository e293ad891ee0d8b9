"""
Confession Board — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one pooled async engine. The app factory builds a
       single instance and stores it on `app.state.database`; route handlers
       receive a per-request `AsyncSession` through `get_db_session`.
Who:   Used by route handlers via FastAPI's dependency injection system,
       by the lifespan handler (startup probe, shutdown dispose) and by tests.

Connection Pooling Strategy:
    pool_size:         Persistent connections for normal load
    max_overflow:      Temporary connections for traffic spikes
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from confession_board.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for migrations and the
    test suite uses to create tables.
    """
    pass


class Database:
    """
    Holds the connection pool and session factory for one application.

    expire_on_commit=False keeps returned rows readable after the service
    commits, so responses can be built from them.
    """

    def __init__(self, settings: Settings):
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            # Echo SQL queries in DEBUG mode
            echo=settings.log_level == "DEBUG",
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """
        Runs a trivial query on a pooled connection.

        Raises whatever the driver raises when the database is unreachable.
        """
        async with self.engine.connect() as conn:
            await conn.execute(select(func.current_timestamp()))

    async def dispose(self) -> None:
        """Closes every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the `Database` the app factory attached to `app.state`
        2. Yields a fresh session to the route handler
        3. On error: rolls back anything the handler left uncommitted
        4. Always: closes the session (returns connection to pool)

    Services commit their own single statement, so there is no commit here.

    Example usage in a route:
        @router.get("/confessions")
        async def list_confessions(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def wait_for_database(database: Database, settings: Settings) -> None:
    """
    What:  Blocks startup until the database answers a ping.
    How:   Tenacity retries `Database.ping` with exponential backoff and
           jitter, up to `db_connect_attempts` times.
    Raises the last connection error if the database never answers, which
    aborts application startup.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential_jitter(
            initial=min(1.0, settings.db_connect_max_wait),
            max=settings.db_connect_max_wait,
            jitter=min(1.0, settings.db_connect_max_wait),
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            await database.ping()
