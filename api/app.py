"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings

from .middleware.errors import register_error_handlers
from .middleware.request_context import RequestContextMiddleware
from .routes import health, users
from modules.assignments.routes import router as assignments_router
from modules.contexts.routes import router as contexts_router
from modules.names.routes import router as names_router
from modules.oauth.routes import router as oauth_router
from modules.resolution.routes import router as resolution_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Context-aware name resolution and OIDC claims API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_error_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(resolution_router, prefix="/api/names", tags=["resolution"])
    app.include_router(names_router, prefix="/api/names", tags=["names"])
    app.include_router(contexts_router, prefix="/api/contexts", tags=["contexts"])
    app.include_router(assignments_router, prefix="/api/assignments", tags=["assignments"])
    app.include_router(oauth_router, prefix="/api/oauth", tags=["oauth"])

    return app


# Application instance for uvicorn
app = create_app()
