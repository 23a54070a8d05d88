from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Dict, List

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from product_api.core.config import Settings
from product_api.core.db import Base, build_sessionmaker
from product_api.main import create_app
from product_api.models.product import Product
from product_api.repositories.product import ProductRepository


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'products.db'}",
        APP_ENV="test",
        QUERY_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest.fixture
def repository(session_maker: async_sessionmaker[AsyncSession]) -> ProductRepository:
    return ProductRepository(session_maker)


@pytest.fixture
def seed(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[List[Dict[str, Any]]], Awaitable[None]]:
    """Insert raw rows straight into the table, bypassing the API."""

    async def _seed(rows: List[Dict[str, Any]]) -> None:
        async with session_maker() as session:
            await session.execute(insert(Product.__table__), rows)
            await session.commit()

    return _seed


@pytest.fixture
def row_count(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[], Awaitable[int]]:
    async def _count() -> int:
        async with session_maker() as session:
            res = await session.execute(select(func.count(Product.id)))
            return int(res.scalar_one())

    return _count


@pytest.fixture
async def client(settings: Settings, engine: AsyncEngine) -> AsyncIterator[AsyncClient]:
    app = create_app(settings, engine=engine)
    # ASGITransport does not drive lifespan events on its own
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
def gql(client: AsyncClient) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """POST a GraphQL document and return the decoded body, asserting 200."""

    async def _gql(query: str, variables: Dict[str, Any] | None = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        resp = await client.post("/graphql", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _gql
