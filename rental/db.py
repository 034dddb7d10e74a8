# rental/db.py
import os

from sqlalchemy import event
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./rental.sqlite3"

# Sync URLs from .env or a hosting provider mapped to the async drivers
_ASYNC_SCHEMES = (
    ("postgres://", "postgresql+asyncpg://"),
    ("postgresql+psycopg://", "postgresql+asyncpg://"),
    ("postgresql+psycopg2://", "postgresql+asyncpg://"),
    ("postgresql://", "postgresql+asyncpg://"),
    ("sqlite://", "sqlite+aiosqlite://"),
)

engine: AsyncEngine
SessionLocal: async_sessionmaker[AsyncSession]


def to_async_url(database_url: str) -> str:
    for prefix, replacement in _ASYNC_SCHEMES:
        if database_url.startswith(prefix):
            return replacement + database_url[len(prefix):]
    return database_url


def _asyncpg_options(url: URL) -> tuple[URL, dict]:
    # asyncpg rejects libpq-only query options; sslmode maps onto its ssl argument
    query = dict(url.query)
    connect_args = {}
    if "sslmode" in query:
        connect_args["ssl"] = query.pop("sslmode")
    query.pop("channel_binding", None)
    return url.set(query=query), connect_args


def _sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _build_engine(database_url: str) -> AsyncEngine:
    url = make_url(to_async_url(database_url))
    connect_args: dict = {}
    if url.get_driver_name() == "asyncpg":
        url, connect_args = _asyncpg_options(url)

    built = create_async_engine(url, pool_pre_ping=True, connect_args=connect_args)
    if url.get_backend_name() == "sqlite":
        # reservation_items cascade on delete only with foreign keys enabled
        event.listen(built.sync_engine, "connect", _sqlite_foreign_keys)
    return built


def configure_engine(database_url: str | None = None) -> None:
    """(Re)bind the module-level engine and session factory.

    Callers that need a session resolve ``db.SessionLocal`` at call time, so
    scripts and tests can point the app at another database.
    """
    global engine, SessionLocal

    engine = _build_engine(database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL))
    SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


configure_engine()
