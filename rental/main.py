import os
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from sentry_sdk.integrations.starlette import StarletteIntegration
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from rental.api import errors
from rental.api.deps import uow_factory
from rental.api.routers.admin_equipment import router as admin_equipment_router
from rental.api.routers.admin_reservations import router as admin_reservations_router
from rental.api.routers.auth import router as auth_router
from rental.api.routers.equipment import router as equipment_router
from rental.api.routers.healthz import router as healthz_router
from rental.api.routers.readyz import router as readyz_router
from rental.api.routers.reservations import router as reservations_router
from rental.core.config import get_settings
from rental.core.startup import run_database_migrations
from rental.logging import setup_logging
from rental.middleware.rate_limit import rate_limit_middleware, rate_limited_response
from rental.middleware.request_id import request_id_middleware
from rental.middleware.security_headers import security_headers_middleware
from rental.services.reservations import seed_order_counter

API_PREFIX = "/api"


def _init_sentry(env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    # traces_sample_rate: clamp to [0.0, 0.2]
    try:
        rate_raw = float(os.getenv("SENTRY_TRACES_RATE", "0"))
    except ValueError:
        rate_raw = 0.0
    sentry_sdk.init(
        dsn=dsn,
        environment=env,
        release=os.getenv("RELEASE"),
        integrations=[StarletteIntegration()],
        traces_sample_rate=max(0.0, min(0.2, rate_raw)),
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_database_migrations()
    if not os.getenv("TESTING"):
        await seed_order_counter(uow_factory)
    yield


def create_app() -> FastAPI:
    setup_logging()
    settings = get_settings()
    _init_sentry(settings.app_env)

    app = FastAPI(title="Outdoor Equipment Rental", lifespan=lifespan)
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie="rental_session",
        max_age=60 * 60 * 12,
        same_site="lax",
        https_only=settings.app_env == "prod",
    )
    if settings.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    for router in (
        equipment_router,
        reservations_router,
        auth_router,
        admin_equipment_router,
        admin_reservations_router,
    ):
        app.include_router(router, prefix=API_PREFIX)
    app.include_router(healthz_router)
    app.include_router(readyz_router)

    @app.get("/health")
    def health():
        return {"status": "ok", "env": settings.app_env}

    @app.exception_handler(RateLimitExceeded)
    async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
        info = getattr(request.state, "rate_limit_info", None)
        if not isinstance(info, dict):
            info = {
                "method": request.method,
                "ip": (request.client.host if request.client else None) or "-",
                "limit": "-",
            }
        return rate_limited_response(info)

    structlog.get_logger(__name__).info("app_startup", env=settings.app_env)
    return app


app = create_app()
