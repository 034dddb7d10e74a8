from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypedDict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from slowapi import Limiter


class RateLimitInfo(TypedDict, total=False):
    method: str
    ip: str
    limit: str


# slowapi supplies the key function and the RateLimitExceeded type handled in
# main; the per-method windows below go through ``limits`` directly.
limiter = Limiter(key_func=lambda request: _client_ip(request))

_storage = MemoryStorage()
_rate = MovingWindowRateLimiter(_storage)

_LIMITS = {
    "GET": "120/minute",
    "HEAD": "120/minute",
    "POST": "30/minute",
    "PUT": "30/minute",
    "PATCH": "30/minute",
    "DELETE": "30/minute",
}
# Tighter window for credential guessing
_LOGIN_LIMIT = "10/minute"


def _client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


def _enabled() -> bool:
    if os.getenv("RATE_LIMIT_ENABLED") in {"1", "true", "TRUE"}:
        return True
    return not os.getenv("TESTING")


def limit_for(method: str, path: str) -> str | None:
    m = method.upper()
    if m == "POST" and path == "/api/auth/login":
        return _LOGIN_LIMIT
    # OPTIONS (CORS preflight) is never limited
    return _LIMITS.get(m)


def rate_limited_response(info: RateLimitInfo) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": {"code": "rate_limited", "message": "Too Many Requests", "detail": info}},
    )


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    if not _enabled():
        return await call_next(request)

    limit_str = limit_for(request.method, request.url.path)
    if not limit_str:
        return await call_next(request)

    ip = _client_ip(request)
    key = f"ip:{ip}|m:{request.method.upper()}|login:{limit_str == _LOGIN_LIMIT}"
    if not _rate.hit(parse_limit(limit_str), key):
        info: RateLimitInfo = {"method": request.method.upper(), "ip": ip, "limit": limit_str}
        request.state.rate_limit_info = info
        return rate_limited_response(info)

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response
