from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from rental.core.exceptions import InfrastructureError


@contextmanager
def database_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        # Unify DB errors as 503
        raise InfrastructureError("database unavailable") from exc
