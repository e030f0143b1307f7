"""
Database connection and session management.

The storage client is an explicit ``Database`` object: the application creates
one per process (see ``guardmap.main``) and the async engine behind it, with
its connection pool, is built lazily on first use and then reused.
"""

import logging
import ssl
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Request
from sqlalchemy import MetaData, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from guardmap.config import Settings
from guardmap.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

# Errors that mean "the database cannot be reached", as opposed to bad queries
STORAGE_ERRORS = (OperationalError, InterfaceError, OSError)

# Query parameters some hosting providers append to URLs; asyncpg rejects them
_SSL_QUERY_PARAMS = ("ssl", "sslmode", "ssl-mode")

# Base class for models
Base = declarative_base(
    metadata=MetaData(
        naming_convention={
            "pk": "pk_%(table_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "ix": "ix_%(table_name)s_%(column_0_name)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(column_0_name)s",
        }
    )
)


def to_async_url(raw_url: str) -> str:
    """Rewrite a plain database URL to its async driver and drop ssl params."""
    url = make_url(raw_url)

    drivername = url.drivername
    if drivername in ("postgres", "postgresql"):
        drivername = "postgresql+asyncpg"
    elif drivername == "sqlite":
        drivername = "sqlite+aiosqlite"

    query = {k: v for k, v in url.query.items() if k not in _SSL_QUERY_PARAMS}
    url = url.set(drivername=drivername, query=query)
    return url.render_as_string(hide_password=False)


def build_ssl_context(settings: Settings) -> ssl.SSLContext | bool:
    """SSL argument for asyncpg, ``False`` when TLS is switched off."""
    if not settings.db_ssl:
        return False
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    if not settings.db_ssl_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


class Database:
    """Owns the engine and session factory for one process."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.url = to_async_url(settings.sqlalchemy_url)
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        """The shared engine, created on first access."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        """Session factory bound to the shared engine."""
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    def _create_engine(self) -> AsyncEngine:
        kwargs = {
            "echo": self.settings.debug,  # Log SQL queries in debug mode
            "pool_pre_ping": True,  # Verify connections before using
        }
        if self.is_sqlite:
            engine = create_async_engine(self.url, **kwargs)

            # SQLite doesn't enforce FK by default
            @event.listens_for(engine.sync_engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        else:
            engine = create_async_engine(
                self.url,
                pool_size=self.settings.db_pool_size,
                connect_args={"ssl": build_ssl_context(self.settings)},
                **kwargs,
            )

        logger.info(
            "Database engine created (driver: %s, ssl: %s)",
            engine.url.drivername,
            "n/a" if self.is_sqlite else ("enabled" if self.settings.db_ssl else "disabled"),
        )
        return engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Session scope: commits on success, rolls back on error.

        Connection failures are re-raised as ``StorageUnavailableError`` so
        callers can tell a failed operation from an empty result.
        """
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except STORAGE_ERRORS as exc:
                logger.error("Database unavailable: %s", exc)
                raise StorageUnavailableError("Database unavailable") from exc
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Check that a connection can be made."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except STORAGE_ERRORS as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Automatically handles commit/rollback and closing.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
