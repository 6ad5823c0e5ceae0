"""
API Middleware - Request/response processing.

Provides:
- Request context (ID propagation and latency logging)
- Error handling with taxonomy codes
- Sliding-window rate limiting per client
"""

from __future__ import annotations

import logging
import math
import time
import uuid
from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from prouvesearch.config.errors import ErrorCode, ProuveSearchError

logger = logging.getLogger(__name__)

__all__ = [
    "ERROR_STATUS",
    "RequestContextMiddleware",
    "ErrorHandlerMiddleware",
    "SlidingWindowLimiter",
    "RateLimitMiddleware",
    "error_response",
]

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.SEARCH_INVALID_QUERY: 400,
    ErrorCode.SECURITY_RATE_LIMITED: 429,
    ErrorCode.CORPUS_UNAVAILABLE: 503,
}

Handler = Callable[[Request], Awaitable[Response]]


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(
    request: Request,
    code: ErrorCode,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Taxonomy error body, tagged with the request ID."""
    return JSONResponse(
        status_code=ERROR_STATUS.get(code, 500),
        content={
            "error": {"code": code.value, "message": message, "details": details or {}},
            "request_id": _request_id(request),
        },
        headers=headers,
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Propagate X-Request-ID and log each request with its latency."""

    async def dispatch(self, request: Request, call_next: Handler) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        logger.info(
            "%s %s status=%d latency_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert ProuveSearchError exceptions to structured JSON responses."""

    async def dispatch(self, request: Request, call_next: Handler) -> Response:
        try:
            return await call_next(request)
        except ProuveSearchError as e:
            logger.error(
                "ProuveSearchError: %s request_id=%s details=%s",
                e.message,
                _request_id(request),
                e.details,
            )
            return error_response(request, e.code, e.message, e.details)
        except Exception as e:
            logger.exception("Unhandled error: %s request_id=%s", e, _request_id(request))
            return error_response(request, ErrorCode.INTERNAL_ERROR, "Internal server error")


class SlidingWindowLimiter:
    """
    Per-client admission over a sliding time window.

    Each client keeps the timestamps of its admitted requests inside the
    window. Clients with no timestamp left in the window are evicted at most
    once per window, so memory tracks recently active clients only.

    Example:
        >>> limiter = SlidingWindowLimiter(limit=2, window_seconds=60)
        >>> limiter.acquire("10.0.0.1")
        0.0
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    @property
    def tracked_clients(self) -> int:
        """Number of clients currently holding window state."""
        return len(self._hits)

    def _prune(self, hits: deque[float], now: float) -> deque[float]:
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        return hits

    def sweep(self) -> int:
        """Drop clients idle for a full window; returns how many were dropped."""
        now = self._clock()
        self._last_sweep = now
        idle = [
            client for client, hits in self._hits.items() if not self._prune(hits, now)
        ]
        for client in idle:
            del self._hits[client]
        if idle:
            logger.debug("Rate limiter evicted %d idle clients", len(idle))
        return len(idle)

    def acquire(self, client: str) -> float:
        """
        Admit one request for ``client``.

        Returns:
            0.0 when admitted, otherwise seconds until the oldest request
            leaves the window
        """
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self.sweep()

        hits = self._prune(self._hits.setdefault(client, deque()), now)
        if len(hits) >= self.limit:
            return hits[0] + self.window_seconds - now
        hits.append(now)
        return 0.0

    def remaining(self, client: str) -> int:
        """Requests ``client`` may still make in the current window."""
        hits = self._hits.get(client)
        if hits is None:
            return self.limit
        return self.limit - len(self._prune(hits, self._clock()))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory rate limiting per client IP."""

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        exempt_paths: Iterable[str] = ("/health",),
    ) -> None:
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests_per_minute, window_seconds=60.0)
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: Handler) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        retry_after = self.limiter.acquire(client_ip)
        if retry_after > 0:
            seconds = max(1, math.ceil(retry_after))
            logger.warning(
                "Rate limit exceeded for %s request_id=%s", client_ip, _request_id(request)
            )
            return error_response(
                request,
                ErrorCode.SECURITY_RATE_LIMITED,
                f"Too many requests. Please retry after {seconds} seconds.",
                details={"retry_after": seconds},
                headers={"Retry-After": str(seconds)},
            )

        remaining = self.limiter.remaining(client_ip)
        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
