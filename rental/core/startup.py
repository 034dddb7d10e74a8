"""Startup migrations and readiness tracking."""

from __future__ import annotations

import os
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import structlog
from structlog.stdlib import BoundLogger

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[2]
_MAX_ATTEMPTS: Final[int] = int(os.getenv("ALEMBIC_STARTUP_MAX_ATTEMPTS", "10"))
_RETRY_DELAY_SECONDS: Final[float] = float(os.getenv("ALEMBIC_STARTUP_RETRY_SECONDS", "2"))


@dataclass
class MigrationState:
    completed: bool = False
    error: str | None = None
    worker: threading.Thread | None = None


_state = MigrationState()


def _truthy(value: str | None) -> bool:
    return value is not None and value.lower() in {"1", "true", "yes", "on"}


def _exit_on_failure() -> bool:
    override = os.getenv("ALEMBIC_EXIT_ON_FAILURE")
    if override is not None:
        return _truthy(override)
    return os.getenv("APP_ENV", "dev").lower() == "prod"


def is_migration_completed() -> bool:
    return _state.completed


def last_migration_error() -> str | None:
    return _state.error


def run_database_migrations() -> None:
    """Run ``alembic upgrade head`` with retries.

    In prod the call blocks and a final failure stops the process. Elsewhere
    the upgrade runs on a daemon thread and ``/readyz`` answers 503 until it
    finishes. Under ``TESTING`` the schema is created by the test fixtures.
    """
    logger = structlog.get_logger(__name__)

    if _state.completed:
        logger.info("alembic_upgrade_skipped", reason="already_completed")
        return
    if os.getenv("TESTING"):
        _state.completed, _state.error = True, None
        logger.info("alembic_upgrade_skipped", reason="testing")
        return

    if _exit_on_failure():
        ok, error = _upgrade_with_retries(logger)
        _state.completed, _state.error = ok, error
        if not ok:
            raise SystemExit(1)
        return

    if _state.worker and _state.worker.is_alive():
        logger.info("alembic_upgrade_skipped", reason="already_running")
        return

    _state.completed, _state.error = False, None
    _state.worker = threading.Thread(target=_background_upgrade, name="alembic-startup", daemon=True)
    _state.worker.start()
    logger.info("alembic_upgrade_background_started")


def _background_upgrade() -> None:
    ok, error = _upgrade_with_retries(structlog.get_logger(__name__).bind(mode="async"))
    _state.completed, _state.error = ok, error


def _upgrade_with_retries(logger: BoundLogger) -> tuple[bool, str | None]:
    command = ("alembic", "upgrade", "head")
    last_error: str | None = None

    for attempt in range(1, _MAX_ATTEMPTS + 1):
        try:
            logger.info("alembic_upgrade_start", attempt=attempt)
            subprocess.run(command, check=True, cwd=PROJECT_ROOT)
        except FileNotFoundError:
            logger.error("alembic_command_missing", command=" ".join(command))
            return False, "alembic command not found"
        except subprocess.CalledProcessError as exc:
            last_error = f"alembic exited with return code {exc.returncode}"
            logger.error("alembic_upgrade_failed", attempt=attempt, returncode=exc.returncode)
        else:
            logger.info("alembic_upgrade_succeeded", attempt=attempt)
            return True, None

        if attempt < _MAX_ATTEMPTS:
            delay = _RETRY_DELAY_SECONDS * attempt
            logger.info("alembic_upgrade_retry", next_attempt=attempt + 1, delay_seconds=delay)
            time.sleep(delay)

    logger.error("alembic_upgrade_exhausted", attempts=_MAX_ATTEMPTS)
    return False, last_error or "alembic upgrade failed"


__all__ = ["is_migration_completed", "last_migration_error", "run_database_migrations"]
