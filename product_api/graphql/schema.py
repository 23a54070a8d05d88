import strawberry

from product_api.graphql.resolvers import Mutation, Query


def build_schema() -> strawberry.Schema:
    return strawberry.Schema(query=Query, mutation=Mutation)
