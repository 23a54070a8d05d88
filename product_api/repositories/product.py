from __future__ import annotations
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, TypeVar

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from product_api.core.exceptions import ProductNotFoundError, StoreTimeoutError
from product_api.models.product import PRODUCT_COLUMNS, Product
from product_api.schemas.product import ProductCreate

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_QUERY_TIMEOUT = 5.0


class ProductRepository:
    """Parameterized reads and writes against the ``products`` table.

    Every call checks out its own session, so resolvers running side by side
    in one request never share a connection. Each call runs under its own
    deadline; when it expires the pending statement is cancelled and
    :class:`StoreTimeoutError` is raised. Nothing is retried.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        *,
        timeout: float = DEFAULT_QUERY_TIMEOUT,
    ) -> None:
        self.session_maker = session_maker
        self.timeout = timeout

    async def _run(
        self, operation: str, work: Callable[[AsyncSession], Awaitable[T]]
    ) -> T:
        started = time.perf_counter()
        try:
            async with self.session_maker() as session:
                return await asyncio.wait_for(work(session), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            log.warning("%s timed out after %.1fs", operation, self.timeout)
            raise StoreTimeoutError(operation, self.timeout) from e
        finally:
            log.debug(
                "%s finished in %.1fms",
                operation,
                (time.perf_counter() - started) * 1000,
            )

    async def count_all(self) -> int:
        async def _count(session: AsyncSession) -> int:
            res = await session.execute(select(func.count(Product.id)))
            return int(res.scalar_one())

        total = await self._run("count_all", _count)
        log.debug("Total products: %s", total)
        return total

    async def fetch_page(self, page: int, limit: int) -> List[Row[Any]]:
        # No ORDER BY: rows come back in the store's natural order.
        offset = (page - 1) * limit
        stmt = select(*PRODUCT_COLUMNS).limit(limit).offset(offset)

        async def _fetch(session: AsyncSession) -> List[Row[Any]]:
            res = await session.execute(stmt)
            return list(res.all())

        return await self._run("fetch_page", _fetch)

    async def fetch_by_id(self, id_: int) -> Row[Any]:
        stmt = select(*PRODUCT_COLUMNS).where(Product.id == id_).limit(1)

        async def _fetch(session: AsyncSession) -> Row[Any] | None:
            res = await session.execute(stmt)
            return res.first()

        row = await self._run("fetch_by_id", _fetch)
        if row is None:
            raise ProductNotFoundError(id_)
        return row

    async def insert(self, data: ProductCreate) -> int:
        stmt = insert(Product.__table__).values(**data.model_dump())

        async def _insert(session: AsyncSession) -> int:
            res = await session.execute(stmt)
            await session.commit()
            return int(res.inserted_primary_key[0])

        new_id = await self._run("insert", _insert)
        log.info("Inserted product %s", new_id)
        return new_id

    async def create(self, data: ProductCreate) -> Row[Any]:
        # Two independent statements; the row is re-read from the store.
        new_id = await self.insert(data)
        return await self.fetch_by_id(new_id)
