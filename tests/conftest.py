# tests/conftest.py
import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

# Configure the environment before the app is imported: the engine is built
# at import time and migrations/rate limiting look at TESTING.
load_dotenv(".env.test", override=False)
os.environ["TESTING"] = "1"
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.mkdtemp()) / 'import.sqlite3'}",
)

from rental import db  # noqa: E402
from rental.core.config import Settings, get_settings  # noqa: E402
from rental.core.startup import run_database_migrations  # noqa: E402
from rental.main import create_app  # noqa: E402
from rental.models import Base, Equipment  # noqa: E402
from rental.services.order_numbers import order_numbers  # noqa: E402

ADMIN_USER = "admin"
ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        secret_key="test-secret",
        admin_username=ADMIN_USER,
        admin_password=ADMIN_PASSWORD,
        public_base_url="https://rental.test",
        payment_iban="CZ6508000000192000145399",
        shop_name="Test Rental",
        lessor_lines=["Test Rental s.r.o.", "Main Street 1, Brno"],
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    # Fresh SQLite file per test; the app resolves db.SessionLocal per call
    db.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}")
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield db.engine
    finally:
        await db.engine.dispose()


@pytest_asyncio.fixture
async def app_client(engine, settings):
    # ASGITransport does not run the lifespan; under TESTING this only marks readiness
    run_database_migrations()
    order_numbers.reset()
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(app_client):
    res = await app_client.post(
        "/api/auth/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD}
    )
    assert res.status_code == 200, res.text
    return app_client


@pytest_asyncio.fixture
async def make_equipment(engine):
    """Insert a catalog entry directly and return its id."""

    async def _make(**overrides) -> int:
        fields = dict(
            name="Tent for 3",
            description="",
            image_url="",
            price_1_to_3_days=100,
            price_4_to_7_days=80,
            price_8_plus_days=60,
            deposit=50,
            stock=2,
            sort_order=0,
            categories=["tents"],
        )
        fields.update(overrides)
        async with db.SessionLocal() as session:
            equipment = Equipment(**fields)
            session.add(equipment)
            await session.commit()
            return int(equipment.id)

    return _make
