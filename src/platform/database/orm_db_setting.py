"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: read/write engines bound to the running event loop
2. Base: declarative base for every ORM model
3. Database: session provider used by the DI container and the unit of work

Read-Write Separation:
- Commands (holds, commits, cancellations, reconciliation) always use the primary
- Read-only queries may use POSTGRES_REPLICA_SERVER when configured

SQLite (DATABASE_URL=sqlite+aiosqlite://...) is supported for local runs and
tests; it gets a NullPool and no pool tuning.
"""

import asyncio
from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _is_sqlite(url: str) -> bool:
    return url.startswith('sqlite')


def build_engine(url: str, *, pool_size: int) -> AsyncEngine:
    """Create an async engine with pool settings appropriate for the dialect."""
    if _is_sqlite(url):
        sqlite_engine = create_async_engine(url, echo=False, poolclass=NullPool)

        @event.listens_for(sqlite_engine.sync_engine, 'connect')
        def _sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.execute('PRAGMA busy_timeout=5000')
            cursor.close()

        return sqlite_engine

    return create_async_engine(
        url,
        echo=False,
        pool_size=pool_size,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


class AsyncEngineManager:
    """
    Manages SQLAlchemy async engines with event loop awareness.

    Engines are recreated when the running loop changes (test clients and
    background runners may start their own loops), which prevents
    "Future attached to a different loop" errors.
    """

    def __init__(self) -> None:
        self._write_engine: Optional[AsyncEngine] = None
        self._read_engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._write_session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._read_session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self, *, read_only: bool = False) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if current_loop is not None and self._loop is not current_loop:
            if self._write_engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engines')
            self._reset()
            self._loop = current_loop

        if self._write_engine is None:
            Logger.base.info('🔗 [DB] Creating database engines')
            self._write_engine = build_engine(
                settings.DATABASE_URL_ASYNC, pool_size=settings.DB_POOL_SIZE_WRITE
            )
            read_url = settings.DATABASE_READ_URL_ASYNC
            self._read_engine = (
                self._write_engine
                if read_url == settings.DATABASE_URL_ASYNC
                else build_engine(read_url, pool_size=settings.DB_POOL_SIZE_READ)
            )

        assert self._read_engine is not None
        return self._read_engine if read_only else self._write_engine

    def get_session_maker(self, *, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine(read_only=read_only)
        if read_only:
            if self._read_session_maker is None:
                self._read_session_maker = async_sessionmaker(engine, expire_on_commit=False)
            return self._read_session_maker
        if self._write_session_maker is None:
            self._write_session_maker = async_sessionmaker(engine, expire_on_commit=False)
        return self._write_session_maker

    async def dispose(self) -> None:
        engines = {id(e): e for e in (self._write_engine, self._read_engine) if e is not None}
        for engine in engines.values():
            await engine.dispose()
        self._reset()

    def _reset(self) -> None:
        # Old engines belong to a dead loop; they are dropped, not disposed
        self._write_engine = None
        self._read_engine = None
        self._write_session_maker = None
        self._read_session_maker = None


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine(*, read_only: bool = False) -> AsyncEngine:
    return _engine_manager.get_engine(read_only=read_only)


def get_session_maker(*, read_only: bool = False) -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker(read_only=read_only)


async def dispose_engines() -> None:
    await _engine_manager.dispose()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create tables from ORM metadata (local SQLite runs; Postgres uses Alembic)."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)


class Database:
    """
    Session provider for dependency injection.

    `session_maker` is resolved lazily on each access so that it always
    belongs to the current event loop.
    """

    def __init__(self, *, read_only: bool = False) -> None:
        self._read_only = read_only

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        return get_session_maker(read_only=self._read_only)
