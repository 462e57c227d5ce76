"""Main FastAPI application for EasyTechAPI."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from easytech_api.auth import PasswordAuthenticator
from easytech_api.config import Settings
from easytech_api.database import build_engine, seed_sample_data
from easytech_api.storage import DuplicateRecordError, Storage, StorageError
from easytech_api.routers import auth, services, blog, testimonials, contact, bookings

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure root logging to stderr and, optionally, a log file."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def error_body(message: str, **extra) -> dict:
    """Error payload carrying the text under both "detail" and "message"."""
    return {"detail": message, "message": message, **extra}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report schema violations as 400 with one entry per offending field."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", errors=jsonable_encoder(exc.errors())),
    )


async def duplicate_record_handler(request: Request, exc: DuplicateRecordError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Record already exists"),
    )


async def storage_exception_handler(request: Request, exc: StorageError):
    """Hide storage failures behind a generic 500."""
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The storage and authenticator are constructed here, shared through
    app.state, and the database engine is disposed on shutdown.

    Args:
        settings: Configuration to use; loaded from the environment if omitted

    Returns:
        FastAPI: The configured application
    """
    if settings is None:
        settings = Settings.from_env()

    configure_logging(settings.log_file)

    storage = Storage(build_engine(settings.database_url))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name}")
        storage.init_schema()
        seed_sample_data(storage, settings)
        logger.info("Sample data seed completed")
        yield
        storage.close()
        logger.info(f"Stopped {settings.app_name}")

    app = FastAPI(
        title=settings.app_name,
        description="API for the EasyTech website: services, blog, testimonials, contact and bookings",
        version=VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.authenticator = PasswordAuthenticator(storage)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DuplicateRecordError, duplicate_record_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)

    # Include routers
    app.include_router(auth.router)
    app.include_router(services.router)
    app.include_router(blog.router)
    app.include_router(testimonials.router)
    app.include_router(contact.router)
    app.include_router(bookings.router)

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": settings.app_name,
            "version": VERSION,
            "status": "running"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
