from .product import Product, PRODUCT_COLUMNS

__all__ = [
    "Product",
    "PRODUCT_COLUMNS",
]
