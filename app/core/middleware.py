from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from typing import Callable
from collections.abc import Awaitable
import time
import logging
from ..config import settings

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

SCHEDULE_SAVE_PATH = "/api/schedule"
SLOW_REQUEST_SECONDS = 2.0

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def rate_limit_exceeded(request: Request, exc: Exception) -> Response:
    # the save form only understands the {"error": true} failure signal
    if request.method == "POST" and request.url.path == SCHEDULE_SAVE_PATH:
        logger.warning(f"Schedule save rate limited for {get_remote_address(request)}")
        return JSONResponse(status_code=400, content={"error": True})
    return _rate_limit_exceeded_handler(request, exc)  # type: ignore[arg-type]


def _allowed_origins() -> list[str]:
    origins = settings.cors_origins_list
    if settings.is_production:
        return [origin for origin in origins if "://localhost" not in origin]
    return origins


def setup_middleware(app: FastAPI):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded)
    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def timing_and_headers(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        started = time.perf_counter()

        response = await call_next(request)

        if settings.is_production:
            response.headers.update(SECURITY_HEADERS)

        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} took {elapsed:.2f}s"
            )

        return response
