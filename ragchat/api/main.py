"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, ragchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ragchat.api.deps.dependencies import get_service_cache
from ragchat.api.routers.router_utils.error_handling import error_response
from ragchat.boundary.db import create_tables
from ragchat.configs import get_settings
from ragchat.core.exceptions import RagChatError
from ragchat.observability.logger import configure_logging
from ragchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, documents_router, health_router, sessions_router

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    if settings.database.is_sqlite:
        logger.info("SQLite database configured, creating tables...")
        await create_tables()

    yield

    # Shutdown
    get_service_cache().clear()
    logger.info("Service cache cleared")


async def ragchat_error_handler(request: Request, exc: RagChatError):
    """Render application errors raised outside route handlers (e.g. in dependencies)."""
    return error_response(exc)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Retrieval-augmented chat over each user's own documents",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
    )

    # Add CORS middleware; X-Chat-Id must be readable by browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Chat-Id", "X-Correlation-ID"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(RagChatError, ragchat_error_handler)

    app.include_router(health_router, prefix="/api")
    app.include_router(sessions_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(documents_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ragchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
