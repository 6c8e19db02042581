"""Request/response logging middleware for FastAPI."""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from goldfish.core.logging_config import get_logger

REQUEST_ID_HEADER = "X-Request-ID"
DURATION_HEADER = "X-Duration-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a correlation id and its duration.

    A caller-supplied ``X-Request-ID`` is reused; otherwise a short id is
    generated. Both the id and the duration are echoed in response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        logger = get_logger(__name__, request_id=request_id)

        logger.info(
            f"{request.method} {request.url.path} started",
            extra={
                "extra_data": {
                    "method": request.method,
                    "path": request.url.path,
                    "client_host": request.client.host if request.client else None,
                }
            },
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} failed",
                extra={
                    "extra_data": {
                        "duration_ms": _elapsed_ms(start_time),
                        "error": str(e),
                    }
                },
                exc_info=True,
            )
            raise

        duration_ms = _elapsed_ms(start_time)
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "extra_data": {
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[DURATION_HEADER] = str(duration_ms)
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
