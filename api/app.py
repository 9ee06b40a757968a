"""
Main FastAPI application factory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from ai import close_recipe_generator, get_recipe_generator
from ai.exceptions import RecipeGenerationFailed, ValidationError
from config import get_settings, validate_production_config
from .middleware import (
    RateLimitMiddleware,
    RequestSizeMiddleware,
    RequestTracingMiddleware,
    SecurityHeadersMiddleware,
)
from .models import ErrorResponse, ErrorType
from .routes import generation_router, health_router, recipes_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()

    logger.info("Starting Recipe Share AI Service", version=settings.app_version)

    if settings.is_production:
        for issue in validate_production_config(settings):
            logger.error("Configuration issue", issue=issue)

    generator = get_recipe_generator()
    logger.info(
        "Recipe generator ready",
        primary_configured=generator.primary_client.configured,
        secondary_configured=generator.dispatcher.secondary_configured,
    )

    yield

    logger.info("Shutting down Recipe Share AI Service")
    try:
        await close_recipe_generator()
    except Exception as e:
        logger.warning("Error during provider client cleanup", error=str(e))


def configure_logging(log_level: str):
    """Configure structured JSON logging"""
    logging.basicConfig(level=getattr(logging, log_level), format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level)),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _error_response(request: Request, status_code: int, error: str, error_type: ErrorType, errors=None):
    request_id = getattr(request.state, "request_id", None)
    body = ErrorResponse(
        error=error,
        error_type=error_type,
        request_id=request_id,
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers={"X-Request-ID": request_id} if request_id else {},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = get_settings()
    configure_logging(settings.log_level.value)

    app = FastAPI(
        title=settings.app_name,
        description="Recipe sharing with AI-generated recipes",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    # Added last runs first: tracing wraps everything
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestSizeMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestTracingMiddleware)

    @app.exception_handler(ValidationError)
    async def generation_validation_handler(request: Request, exc: ValidationError):
        return _error_response(request, 400, exc.message, ErrorType.VALIDATION_ERROR)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return _error_response(
            request, 400, "Request validation failed", ErrorType.VALIDATION_ERROR, errors=errors
        )

    @app.exception_handler(RecipeGenerationFailed)
    async def generation_failed_handler(request: Request, exc: RecipeGenerationFailed):
        logger.error("Recipe generation failed", error=exc.message)
        return _error_response(request, 500, "Failed to generate recipe", ErrorType.GENERATION_FAILED)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error_type_map = {
            400: ErrorType.VALIDATION_ERROR,
            404: ErrorType.NOT_FOUND,
            405: ErrorType.VALIDATION_ERROR,
            429: ErrorType.RATE_LIMIT_EXCEEDED,
            503: ErrorType.SERVICE_UNAVAILABLE,
        }
        return _error_response(
            request,
            exc.status_code,
            str(exc.detail),
            error_type_map.get(exc.status_code, ErrorType.INTERNAL_ERROR),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        # Don't expose internal error details in production
        detail = str(exc) if not settings.is_production else "Internal server error"
        return _error_response(request, 500, detail, ErrorType.INTERNAL_ERROR)

    app.include_router(health_router)
    app.include_router(generation_router)
    app.include_router(recipes_router)

    return app
