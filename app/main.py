from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import time
import uuid
from app.core.config import Settings, get_settings
from app.core.context import AppContext
from app.core.logging import logger, setup_logging
from app.core.exceptions import (
    HelpingHandError,
    helping_hand_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from app.api.api import api_router
from app.database.database import init_db


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    """Build the API. Pass ``context`` to run against an existing engine (tests, scripts)."""
    if context is None:
        settings = settings or get_settings()
        context = AppContext.from_settings(settings)
    settings = context.settings

    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Helping Hand donation matching API",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )
    app.state.context = context

    # Add exception handlers
    app.add_exception_handler(HelpingHandError, helping_hand_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        request_id = str(uuid.uuid4())

        # Add request ID to request state
        request.state.request_id = request_id

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={"request_id": request_id}
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} - {process_time:.3f}s",
            extra={"request_id": request_id}
        )

        response.headers["X-Request-ID"] = request_id
        return response

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT}")

        if settings.AUTO_CREATE_TABLES:
            try:
                init_db(context.engine)
                logger.info("Database initialized successfully")
            except Exception as e:
                logger.error(f"Database initialization failed: {e}")
                raise

        db = context.session_factory()
        try:
            context.session_store.purge_expired(db)
        except Exception as e:
            logger.error(f"Error purging expired sessions: {e}")
            # Stale sessions are rejected on lookup anyway
        finally:
            db.close()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info("Application shutting down")
        context.dispose()

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "environment": settings.ENVIRONMENT,
            "docs": "/docs" if settings.DEBUG else "disabled"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    return app
