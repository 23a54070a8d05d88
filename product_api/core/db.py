from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import text
from product_api.core.config import Settings

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _connect_args(settings: Settings) -> Dict[str, Any]:
    url = make_url(settings.database_url)
    if url.get_backend_name() == "mysql":
        return {
            "connect_timeout": settings.DB_CONNECT_TIMEOUT,
            "init_command": f"SET time_zone = '{settings.DB_TIMEZONE}'",
        }
    return {}


def build_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    log.info(
        "Setting up database engine for %s (pool_size=%s)",
        url.render_as_string(hide_password=True),
        settings.DB_POOL_SIZE,
    )

    engine_kwargs: Dict[str, Any] = {
        "connect_args": _connect_args(settings),
        "pool_pre_ping": True,
        "echo": False,
    }
    if url.get_backend_name() != "sqlite":
        engine_kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_async_engine(url, **engine_kwargs)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


def get_sessionmaker(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker


async def ping_db(engine: AsyncEngine, timeout: float = 6.0) -> bool:
    try:

        async def _do_ping():
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await asyncio.wait_for(_do_ping(), timeout=timeout)
        return True
    except Exception as e:
        log.warning("DB ping failed (%s): %r", type(e).__name__, e)
        return False


async def create_schema_if_needed(engine: AsyncEngine) -> None:
    # registers the products table on Base.metadata
    from product_api.models import product  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def wait_for_db(
    engine: AsyncEngine, max_attempts: int = 1, delay_seconds: float = 1.5
) -> None:
    for attempt in range(1, max_attempts + 1):
        if await ping_db(engine):
            log.info("Database is reachable")
            return
        if attempt < max_attempts:
            log.info("DB not ready yet (attempt %s/%s). Retrying...", attempt, max_attempts)
            await asyncio.sleep(delay_seconds)
    raise RuntimeError(f"Database not reachable after {max_attempts} attempt(s)")
