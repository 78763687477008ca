"""Async SQLAlchemy engines for the media metadata store.

Two roles share one database: ``write`` serves upload and delete, ``read``
serves the public listing and admin lookups. Each role gets its own pool and
reports its role as the PostgreSQL ``application_name``, and the read role
opens read-only transactions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "EngineRole",
    "build_async_url",
    "create_engine_for_role",
    "create_read_engine",
    "create_write_engine",
]


class EngineRole(StrEnum):
    WRITE = "write"
    READ = "read"


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the asyncpg URL with percent-encoded credentials."""
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)


def server_settings_for(role: EngineRole) -> dict[str, str]:
    """PostgreSQL session parameters applied to every pooled connection."""
    params = {"application_name": f"chrononagram-{role}"}
    if role is EngineRole.READ:
        params["default_transaction_read_only"] = "on"
    return params


def create_engine_for_role(settings: DatabaseSettings, role: EngineRole) -> AsyncEngine:
    """Create a pooled asyncpg engine for one role.

    The pool is capped at ``pool_max_connections`` with no overflow.
    """
    connect_args: dict[str, Any] = {"server_settings": server_settings_for(role)}
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_write_engine(settings: DatabaseSettings) -> AsyncEngine:
    return create_engine_for_role(settings, EngineRole.WRITE)


def create_read_engine(settings: DatabaseSettings) -> AsyncEngine:
    return create_engine_for_role(settings, EngineRole.READ)
