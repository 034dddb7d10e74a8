from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip(request: Request) -> str:
    return (request.client.host if request.client else None) or "-"


def _elapsed_ms(start_ns: int) -> float:
    return round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and write one ``http_request`` access event per call.

    The id, path and method are bound to structlog contextvars for the
    duration of the request so service events carry them too.
    """
    logger = structlog.get_logger(__name__)
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    path, method = request.url.path, request.method

    structlog.contextvars.bind_contextvars(request_id=rid, path=path, method=method)
    try:
        sentry_sdk.set_tag("request_id", rid)
        sentry_sdk.set_tag("path", path)
        sentry_sdk.set_tag("method", method)
    except Exception:
        # Never let Sentry instrumentation break request processing
        pass

    start_ns = time.perf_counter_ns()
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            "http_request",
            status=500,
            duration_ms=_elapsed_ms(start_ns),
            client_ip=_client_ip(request),
            exc_info=True,
        )
        structlog.contextvars.clear_contextvars()
        raise

    logger.info(
        "http_request",
        status=response.status_code,
        duration_ms=_elapsed_ms(start_ns),
        client_ip=_client_ip(request),
    )
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response
