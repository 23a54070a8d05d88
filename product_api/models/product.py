from typing import Optional
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from product_api.core.db import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ml_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    merchant_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    long_desc: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    short_desc: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    quota: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    start_period: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    end_period: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


# Selected explicitly so reads return plain rows, not identity-mapped objects.
PRODUCT_COLUMNS = (
    Product.id,
    Product.ml_id,
    Product.merchant_id,
    Product.name,
    Product.long_desc,
    Product.short_desc,
    Product.icon,
    Product.quota,
    Product.start_period,
    Product.end_period,
)
