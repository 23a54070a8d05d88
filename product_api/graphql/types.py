from typing import List, Optional

import strawberry

from product_api.schemas.product import ProductSchema


@strawberry.type(description="A catalog product. Absent attributes are null, never empty strings.")
class Product:
    id: int
    ml_id: Optional[str] = None
    merchant_id: Optional[str] = None
    name: Optional[str] = None
    long_desc: Optional[str] = None
    short_desc: Optional[str] = None
    icon: Optional[str] = None
    quota: Optional[str] = None
    start_period: Optional[str] = None
    end_period: Optional[str] = None

    @classmethod
    def from_schema(cls, entity: ProductSchema) -> "Product":
        return cls(**entity.model_dump())


@strawberry.type
class ProductPage:
    page: int
    limit: int
    total_data: int
    total_pages: int
    data: List[Product]
