"""Domain probes for shared infrastructure.

Covers the lifecycle of the metadata store engines. Context-specific probes
live next to the code they observe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DatabaseProbe(Protocol):
    """Domain probe for metadata store engines."""

    def engine_created(self, role: str, connection_string: str, pool_size: int) -> None:
        ...

    def engine_disposed(self, role: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> DatabaseProbe:
        ...


class DefaultDatabaseProbe:
    """structlog-backed DatabaseProbe."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def _log(self, level: str, event: str, **fields: Any) -> None:
        # Explicit event fields win over the bound context.
        log = getattr(self._logger, level)
        log(event, **{**self._get_context_kwargs(), **fields})

    def with_context(self, context: ObservationContext) -> DefaultDatabaseProbe:
        return DefaultDatabaseProbe(logger=self._logger, context=context)

    def engine_created(self, role: str, connection_string: str, pool_size: int) -> None:
        """Record a new engine. ``connection_string`` must not carry a password."""
        self._log(
            "info",
            "metadata_store_engine_created",
            role=str(role),
            connection_string=connection_string,
            pool_size=pool_size,
        )

    def engine_disposed(self, role: str) -> None:
        self._log(
            "info",
            "metadata_store_engine_disposed",
            role=str(role),
        )
