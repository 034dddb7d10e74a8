from __future__ import annotations

import secrets

import structlog
from fastapi import APIRouter, Depends, Request

from rental.api.deps import SESSION_USER_KEY, get_settings
from rental.core.config import Settings
from rental.core.exceptions import AuthenticationError
from rental.schemas.auth import AuthStatus, LoginRequest
from rental.schemas.common import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = structlog.get_logger(__name__)


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


@router.post(
    "/login",
    response_model=AuthStatus,
    responses={401: {"model": ErrorResponse}},
    summary="Open a back-office session",
)
async def login(payload: LoginRequest, request: Request, settings: Settings = Depends(get_settings)):
    # Evaluate both so timing does not reveal which one was wrong
    user_ok = _matches(payload.username, settings.admin_username)
    pass_ok = _matches(payload.password, settings.admin_password)
    if not (user_ok and pass_ok):
        logger.warning("admin_login_failed", username=payload.username)
        raise AuthenticationError("invalid credentials")
    request.session[SESSION_USER_KEY] = payload.username
    logger.info("admin_login", username=payload.username)
    return AuthStatus(authenticated=True, username=payload.username)


@router.post("/logout", response_model=AuthStatus, summary="Close the back-office session")
async def logout(request: Request):
    request.session.clear()
    return AuthStatus(authenticated=False)


@router.get("/status", response_model=AuthStatus, summary="Current session state")
async def auth_status(request: Request):
    user = request.session.get(SESSION_USER_KEY)
    return AuthStatus(authenticated=bool(user), username=user)
