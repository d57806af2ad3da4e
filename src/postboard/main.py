# src/postboard/main.py
"""Main entry point for the Postboard application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.api.v1 import posts_router
from postboard.core.logging import setup_logging
from postboard.core.settings import settings
from postboard.db.session import create_tables

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("%s %s starting", settings.app_name, settings.app_version)
    Path(settings.images_dir).mkdir(parents=True, exist_ok=True)
    if settings.create_tables_on_startup:
        create_tables()
        logger.info("Database tables ensured")
    yield
    logger.info("%s shutting down", settings.app_name)


# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Posts with images, editable only by their creators",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed input with the same envelope as other errors."""
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid post data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with a generic 500."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Include API routers
app.include_router(posts_router, prefix="/api")

# Uploaded images are served back from the same host.
app.mount(
    settings.images_mount_path,
    StaticFiles(directory=settings.images_dir, check_dir=False),
    name="images",
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("postboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
