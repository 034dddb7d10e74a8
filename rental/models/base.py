from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Python-side timestamps: async sessions cannot lazy-load server defaults
    return datetime.now(UTC)
