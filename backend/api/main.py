"""
Backend API Application
=======================

``create_app`` wires the People Access Object, middleware, exception
handlers and the route table into a FastAPI app. Tests pass their own
session factory; the module-level ``app`` uses the configured database.

Features:
- Routes registered from a validated route table
- Consistent ``{"error", "message"}`` bodies for every failure
- Request ID correlation in logs and response headers
- Deterministic OpenAPI document at /openapi.json, Swagger UI at /docs
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from ..core.config import settings
from ..core.exceptions import StarterAPIException
from ..database import SessionLocal, check_connection, engine
from ..repositories import PeopleDAO
from ..utils.logging import setup_logging
from .documentation import configure_api_docs
from .middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    RequestTimingMiddleware,
    exception_handler,
    generic_exception_handler,
    http_exception_handler,
)
from .routes import build_router
from .validation_middleware import register_validation_handlers

# Initialize logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager - handles startup and shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if check_connection(app.state.db_engine):
        logger.info("Database connection successful")
    else:
        logger.warning("Database unreachable at startup; requests will fail until it recovers")

    logger.info(f"Swagger documentation available at {settings.SERVER_URL}{settings.DOCS_URL}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


def create_app(session_factory: sessionmaker | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        session_factory: SQLAlchemy sessionmaker for the Access Objects
            (defaults to the configured ``SessionLocal``)

    Returns:
        Configured FastAPI app
    """
    session_factory = session_factory or SessionLocal

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.API_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url=settings.DOCS_URL,
        redoc_url=None,
        lifespan=lifespan,
        separate_input_output_schemas=False,
    )

    app.state.started_at = time.monotonic()
    app.state.session_factory = session_factory
    app.state.db_engine = session_factory.kw.get("bind") or engine
    app.state.people_dao = PeopleDAO(session_factory)

    # ==================== MIDDLEWARE ====================
    # Last added runs first: request ID is set before anything logs
    app.add_middleware(GZipMiddleware, minimum_size=500, compresslevel=6)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=settings.ALLOW_CREDENTIALS,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
        expose_headers=["X-Process-Time", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ==================== EXCEPTION HANDLERS ====================
    app.add_exception_handler(StarterAPIException, exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    register_validation_handlers(app)

    # ==================== ROUTES ====================
    app.include_router(build_router())
    configure_api_docs(app)

    return app


app = create_app()

__all__ = ["app", "create_app", "lifespan"]
