"""Database dependency injection for FastAPI.

One engine and sessionmaker per role, created on first use and shared by
the whole process. Sessions are per request and never auto-commit; callers
open transactions with ``async with session.begin()``.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import EngineRole, create_engine_for_role
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings

_probe = DefaultDatabaseProbe()

_engines: dict[EngineRole, AsyncEngine] = {}
_sessionmakers: dict[EngineRole, async_sessionmaker[AsyncSession]] = {}
_engine_lock = threading.Lock()


def _engine_for(role: EngineRole) -> AsyncEngine:
    engine = _engines.get(role)
    if engine is None:
        with _engine_lock:
            engine = _engines.get(role)
            if engine is None:
                settings = get_database_settings()
                engine = create_engine_for_role(settings, role)
                _sessionmakers[role] = async_sessionmaker(
                    engine, expire_on_commit=False, class_=AsyncSession
                )
                _engines[role] = engine
                _probe.engine_created(
                    role,
                    settings.connection_string,
                    pool_size=settings.pool_max_connections,
                )
    return engine


def get_write_engine() -> AsyncEngine:
    """Engine used for metadata inserts and deletes."""
    return _engine_for(EngineRole.WRITE)


def get_read_engine() -> AsyncEngine:
    """Engine used for listings and lookups (read-only transactions)."""
    return _engine_for(EngineRole.READ)


async def _session_for(role: EngineRole) -> AsyncGenerator[AsyncSession, None]:
    _engine_for(role)
    async with _sessionmakers[role]() as session:
        yield session


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session on the write engine."""
    async for session in _session_for(EngineRole.WRITE):
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session on the read engine."""
    async for session in _session_for(EngineRole.READ):
        yield session


async def close_database_connections() -> None:
    """Dispose every engine created so far.

    Called on application shutdown; a later request creates fresh engines.
    """
    with _engine_lock:
        engines = list(_engines.items())
        _engines.clear()
        _sessionmakers.clear()

    for role, engine in engines:
        await engine.dispose()
        _probe.engine_disposed(role)
