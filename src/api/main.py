"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database.dependencies import close_database_connections
from infrastructure.error_handlers import install_error_handlers
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from media.presentation import MEDIA_ERROR_STATUSES, admin_router, public_router
from tenancy.presentation import TENANCY_ERROR_STATUSES


@asynccontextmanager
async def chrononagram_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration on startup (level from Settings)
    - Database engine disposal on shutdown (engines are created lazily)
    """
    settings = get_settings()
    configure_logging(settings.effective_log_level, version=__version__)
    yield
    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant photo gallery API",
    version=__version__,
    lifespan=chrononagram_lifespan,
)

install_error_handlers(app, TENANCY_ERROR_STATUSES, MEDIA_ERROR_STATUSES)

# Media bounded context routes
app.include_router(admin_router)
app.include_router(public_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
