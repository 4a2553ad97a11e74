"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Easier to test with different configurations
- Explicit about initialization order

For local development:
    uvicorn src.main:app --reload

For production:
    gunicorn src.main:app -w 4 -k uvicorn.workers.UvicornWorker
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import health, insights
from .config.settings import get_settings
from .core.insights.analyst import InsightGenerationError, InsightRequestError

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Missing 'prompt' or 'rounds' data in request body."
GENERATION_FAILED_MESSAGE = (
    "Failed to get insights from the AI analyst. Please try again later."
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Refuses to start when required configuration is missing.
    """
    # Startup
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    logger.info(
        "Disc Golf Insights API starting",
        extra={
            "version": settings.api_version,
            "model": settings.anthropic_model,
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )
        raise RuntimeError(
            f"Missing required configuration: {', '.join(missing_fields)}"
        )

    yield

    # Shutdown
    logger.info("Disc Golf Insights API shutting down")


def create_app() -> FastAPI:
    """
    Application factory.

    Creates and configures the FastAPI application.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        AI-powered analysis of disc golf rounds.

        Post a question and your rounds to `POST /api/insight`; the question
        picks the shape of the answer (best/worst round, average score, most
        common course, hole-by-hole, summary, or a short direct answer).
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    # Configure allowed origins via CORS_ORIGINS environment variable
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        insights.router,
        prefix="/api",
        tags=["Insights"],
    )

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint - point at docs."""
        return {
            "message": "Disc Golf Insights API",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(InsightRequestError)
    @app.exception_handler(RequestValidationError)
    async def invalid_request_handler(request: Request, exc: Exception):
        """Every malformed body gets the same 400."""
        logger.warning(
            "Rejected insight request",
            extra={"path": request.url.path, "error": str(exc)}
        )
        return JSONResponse(
            status_code=400,
            content={"error": INVALID_REQUEST_MESSAGE},
        )

    @app.exception_handler(InsightGenerationError)
    async def generation_error_handler(request: Request, exc: InsightGenerationError):
        """The cause is logged; the caller only sees a fixed message."""
        logger.error(
            "Insight generation failed",
            extra={"path": request.url.path, "error": str(exc)},
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": GENERATION_FAILED_MESSAGE},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Prevents stack traces from leaking to clients. We log the full
        error server-side but return a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error. Please contact support if this persists."
            }
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
        }
    )

    return app


# Create the application instance
# This is what uvicorn/gunicorn will import
app = create_app()


# For debugging/development
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
