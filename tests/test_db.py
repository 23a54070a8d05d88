import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from product_api.core import db
from product_api.core.config import Settings
from product_api.core.db import create_schema_if_needed, ping_db, wait_for_db
from product_api.main import create_app


async def test_ping_reachable_database(engine):
    assert await ping_db(engine) is True


async def test_wait_for_db_aborts_when_unreachable(tmp_path):
    missing = tmp_path / "no-such-dir" / "products.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{missing}")
    try:
        with pytest.raises(RuntimeError, match="not reachable"):
            await wait_for_db(engine, max_attempts=2, delay_seconds=0)
    finally:
        await engine.dispose()


async def test_startup_pings_once_then_aborts(tmp_path, monkeypatch):
    pings = []

    async def _unreachable(engine, timeout=6.0):
        pings.append(engine)
        return False

    monkeypatch.setattr(db, "ping_db", _unreachable)
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'products.db'}")
    app = create_app(Settings(APP_ENV="test"), engine=engine)
    try:
        with pytest.raises(RuntimeError, match="after 1 attempt"):
            async with app.router.lifespan_context(app):
                pass
    finally:
        await engine.dispose()

    assert len(pings) == 1


async def test_create_schema_creates_products_table(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    try:
        await create_schema_if_needed(engine)

        async with engine.connect() as conn:
            columns = await conn.run_sync(
                lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("products")]
            )
    finally:
        await engine.dispose()

    assert columns == [
        "id",
        "ml_id",
        "merchant_id",
        "name",
        "long_desc",
        "short_desc",
        "icon",
        "quota",
        "start_period",
        "end_period",
    ]
