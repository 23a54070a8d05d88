from __future__ import annotations
from dataclasses import dataclass

from product_api.repositories.product import ProductRepository


@dataclass
class GraphQLContext:
    """Per-request dependencies handed to every resolver."""

    products: ProductRepository
