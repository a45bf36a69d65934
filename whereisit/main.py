"""
Main FastAPI Application
Entry point for the WhereIsIt API.

This module creates and configures the FastAPI application instance,
sets up middleware, and defines the health check endpoint.

Run with:
    uvicorn whereisit.main:app --host 0.0.0.0 --port 8000
"""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from whereisit import __version__
from whereisit.api.v1.router import api_router
from whereisit.core.config import settings
from whereisit.db.session import engine, SessionLocal
from whereisit.middleware.cors import setup_cors
from whereisit.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from whereisit.models import Base
from whereisit.services.error_logging import configure_error_logging

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s | %(levelname)s | %(name)s | %(message)s'
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    description="""
    WhereIsIt API - shared household inventory.

    Features:
    - Households with invitations by email and code
    - Locations, containers and items with a nested inventory view
    - Consumption tracking with reorder suggestions
    - Shared shopping list
    """
)


# Setup CORS middleware
setup_cors(app)

# Setup error handler middleware
# Catches all unhandled exceptions and logs them
app.add_middleware(ErrorHandlerMiddleware)

# Domain errors -> HTTP status codes
register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    """
    Application startup handler.

    Tasks performed:
    - Create all database tables if they don't exist
    - Configure error logging (files and database)

    Note: In production, use migrations instead of
    Base.metadata.create_all() for schema changes.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    configure_error_logging(SessionLocal, settings.LOGS_DIR)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown complete")


@app.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Simple endpoint to verify API is running"
)
async def health_check():
    """
    Health check endpoint.

    Used by monitoring tools and container orchestrators to verify
    the application is running correctly.
    """
    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "version": __version__,
            "api": settings.PROJECT_NAME
        }
    )


@app.get(
    "/",
    tags=["Root"],
    summary="API Root",
    description="Root endpoint with API information"
)
async def root():
    return {
        "message": "Welcome to WhereIsIt API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health"
    }


# Include API v1 router
# All v1 endpoints are prefixed with /api/v1
app.include_router(
    api_router,
    prefix=f"/api/{settings.API_VERSION}",
)
