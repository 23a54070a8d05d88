from typing import Dict

PRODUCT_FIELDS = (
    "ml_id",
    "merchant_id",
    "name",
    "long_desc",
    "short_desc",
    "icon",
    "quota",
    "start_period",
    "end_period",
)

# GraphQL names of the text attributes, in PRODUCT_FIELDS order
GRAPHQL_FIELDS = (
    "mlId",
    "merchantId",
    "name",
    "longDesc",
    "shortDesc",
    "icon",
    "quota",
    "startPeriod",
    "endPeriod",
)

PRODUCT_SELECTION = "id " + " ".join(GRAPHQL_FIELDS)


def product_fields(n: int = 1) -> Dict[str, str]:
    return {
        "ml_id": f"MLB{n:04d}",
        "merchant_id": f"merchant-{n}",
        "name": f"Product {n}",
        "long_desc": f"Long description of product {n}",
        "short_desc": f"Short {n}",
        "icon": f"https://cdn.example.com/icons/{n}.png",
        "quota": str(n * 10),
        "start_period": "2024-01-01",
        "end_period": "2024-12-31",
    }


def as_graphql(fields: Dict[str, str]) -> Dict[str, str]:
    return {gql: fields[col] for col, gql in zip(PRODUCT_FIELDS, GRAPHQL_FIELDS)}
