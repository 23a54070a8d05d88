import math
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.engine import Row

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class ProductSchema(BaseModel):
    """API-facing product. Null columns stay ``None``, never ``""``."""

    model_config = ConfigDict(from_attributes=True)

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

    @field_validator("id", mode="before")
    @classmethod
    def _null_id_is_zero(cls, v):
        return 0 if v is None else v

    @classmethod
    def from_row(cls, row: Row[Any]) -> "ProductSchema":
        return cls.model_validate(dict(row._mapping))


class ProductCreate(BaseModel):
    ml_id: str
    merchant_id: str
    name: str
    long_desc: str
    short_desc: str
    icon: str
    quota: str
    start_period: str
    end_period: str


class PageParams(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_args(cls, page: Optional[int], limit: Optional[int]) -> "PageParams":
        # page <= 1 (or missing) means the first page
        effective_page = page if page is not None and page > 1 else DEFAULT_PAGE
        effective_limit = limit if limit is not None else DEFAULT_LIMIT
        return cls(page=effective_page, limit=effective_limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return int(math.ceil(float(total) / float(self.limit)))
