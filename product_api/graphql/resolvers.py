from typing import Optional

import strawberry
from strawberry.types import Info

from product_api.core.exceptions import InvalidPaginationError
from product_api.graphql.context import GraphQLContext
from product_api.graphql.types import Product, ProductPage
from product_api.schemas.product import PageParams, ProductCreate, ProductSchema


def _context(info: Info) -> GraphQLContext:
    return info.context


@strawberry.type
class Query:
    @strawberry.field(description="Paginated product listing.")
    async def products(
        self,
        info: Info,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Optional[ProductPage]:
        params = PageParams.from_args(page, limit)
        if params.limit <= 0:
            raise InvalidPaginationError("limit must be a positive integer")

        repo = _context(info).products
        total = await repo.count_all()
        # float division, then ceiling: 25 rows / 10 per page -> 3 pages
        total_pages = params.total_pages(total)
        rows = await repo.fetch_page(params.page, params.limit)

        return ProductPage(
            page=params.page,
            limit=params.limit,
            total_data=total,
            total_pages=total_pages,
            data=[Product.from_schema(ProductSchema.from_row(r)) for r in rows],
        )

    @strawberry.field(
        description=(
            "Single product by id. A missing id resolves to null; "
            "an unknown id is reported as an error."
        )
    )
    async def product(self, info: Info, id: Optional[int] = None) -> Optional[Product]:
        if id is None:
            return None

        row = await _context(info).products.fetch_by_id(id)
        return Product.from_schema(ProductSchema.from_row(row))


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Insert a product and return it as stored.")
    async def create_product(
        self,
        info: Info,
        ml_id: str,
        merchant_id: str,
        name: str,
        long_desc: str,
        short_desc: str,
        icon: str,
        quota: str,
        start_period: str,
        end_period: str,
    ) -> Optional[Product]:
        data = ProductCreate(
            ml_id=ml_id,
            merchant_id=merchant_id,
            name=name,
            long_desc=long_desc,
            short_desc=short_desc,
            icon=icon,
            quota=quota,
            start_period=start_period,
            end_period=end_period,
        )
        row = await _context(info).products.create(data)
        return Product.from_schema(ProductSchema.from_row(row))
