"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from energydash.api.routes import conversions, health, meters, preferences
from energydash.core.config import settings
from energydash.core.database import init_db
from energydash.core.exceptions import register_exception_handlers
from energydash.core.logging import configure_logging
from energydash.web.routes import web_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup: Create database tables
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Energy dashboard administration service",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Session middleware for admin form flash messages
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=settings.SECRET_KEY,
    session_cookie="energydash_session",
    same_site="lax",
    https_only=not settings.DEBUG,
)

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(preferences.router, prefix="/api")
app.include_router(conversions.router, prefix="/api")
app.include_router(meters.router, prefix="/api")

# Include web routes (Jinja2 admin pages)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "energydash.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
