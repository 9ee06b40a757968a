"""
Middleware for the Recipe Share AI Service
Request tracing, rate limiting, security headers and request size limits
"""

import time
import uuid
from collections import defaultdict, deque
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from config import get_settings
from .models import ErrorResponse, ErrorType

logger = structlog.get_logger()

UNLIMITED_PATHS = ("/health", "/ready", "/ping")
RATE_LIMIT_WINDOW = 60  # seconds


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Add request tracing and timing information"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        start_time = time.time()
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                error=str(exc),
                error_type=type(exc).__name__,
                process_time=round(process_time, 4),
            )
            error_response = ErrorResponse(
                error="Internal server error",
                error_type=ErrorType.INTERNAL_ERROR,
                request_id=request_id,
            )
            return JSONResponse(
                status_code=500,
                content=error_response.model_dump(mode="json", exclude_none=True),
                headers={"X-Request-ID": request_id},
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))

        logger.info(
            "Request completed",
            request_id=request_id,
            status_code=response.status_code,
            process_time=round(process_time, 4),
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client rate limiting over a sliding one-minute window"""

    def __init__(self, app, requests_per_minute: Optional[int] = None, cleanup_interval: int = 300):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute or get_settings().rate_limit_requests
        self.request_history: Dict[str, deque] = defaultdict(deque)
        self.cleanup_interval = cleanup_interval
        self.last_cleanup = time.time()

    def _prune(self, client_ip: str, now: float) -> deque:
        history = self.request_history[client_ip]
        while history and history[0] <= now - RATE_LIMIT_WINDOW:
            history.popleft()
        return history

    def _cleanup_old_requests(self, now: float):
        """Drop clients with no requests inside the window"""
        if now - self.last_cleanup < self.cleanup_interval:
            return

        for client_ip in list(self.request_history.keys()):
            if not self._prune(client_ip, now):
                del self.request_history[client_ip]
        self.last_cleanup = now

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in UNLIMITED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        self._cleanup_old_requests(now)
        history = self._prune(client_ip, now)

        if len(history) >= self.requests_per_minute:
            logger.warning("Rate limit exceeded", client_ip=client_ip)
            error_response = ErrorResponse(
                error=f"Rate limit exceeded: {self.requests_per_minute} requests per minute",
                error_type=ErrorType.RATE_LIMIT_EXCEEDED,
                request_id=getattr(request.state, "request_id", None),
            )
            return JSONResponse(
                status_code=429,
                content=error_response.model_dump(mode="json", exclude_none=True),
                headers={
                    "Retry-After": "60",
                    "X-RateLimit-Limit": str(self.requests_per_minute),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(now + 60)),
                },
            )

        history.append(now)
        response = await call_next(request)

        remaining = max(0, self.requests_per_minute - len(history))
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(int(now + 60))
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # Only add HSTS in production with HTTPS
        if get_settings().is_production and request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class RequestSizeMiddleware(BaseHTTPMiddleware):
    """Limit request body size"""

    def __init__(self, app, max_size: Optional[int] = None):
        super().__init__(app)
        self.max_size = max_size or get_settings().max_request_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            error_response = ErrorResponse(
                error=f"Request body too large. Maximum size: {self.max_size} bytes",
                error_type=ErrorType.VALIDATION_ERROR,
                request_id=getattr(request.state, "request_id", None),
            )
            return JSONResponse(
                status_code=413,
                content=error_response.model_dump(mode="json", exclude_none=True),
            )

        return await call_next(request)
