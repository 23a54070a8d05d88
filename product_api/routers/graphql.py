import logging
from typing import Any, Dict, Optional

import strawberry
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from strawberry.types import ExecutionResult

from product_api.core.config import Settings
from product_api.core.db import get_sessionmaker
from product_api.graphql.context import GraphQLContext
from product_api.repositories.product import ProductRepository

log = logging.getLogger(__name__)

router = APIRouter(tags=["graphql"])


class GraphQLRequest(BaseModel):
    query: str = ""
    variables: Optional[Dict[str, Any]] = None
    operationName: Optional[str] = None


def _format_result(result: ExecutionResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"data": result.data}
    if result.errors:
        payload["errors"] = [err.formatted for err in result.errors]
    return payload


@router.post("/graphql")
async def graphql_endpoint(
    request: Request,
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
):
    """
    Execute a GraphQL document. Query failures are reported in ``errors``
    with status 200; only an unreadable request body yields 400.
    """
    try:
        body = await request.json()
    except ValueError as e:
        log.info("Rejected malformed JSON body: %s", e)
        return JSONResponse(status_code=400, content={"error": f"invalid JSON body: {e}"})

    try:
        params = GraphQLRequest.model_validate(body)
    except ValidationError as e:
        log.info("Rejected GraphQL envelope: %s", e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    if not params.query.strip():
        error = GraphQLError("Syntax Error: Unexpected <EOF>.")
        return JSONResponse(content={"data": None, "errors": [error.formatted]})

    settings: Settings = request.app.state.settings
    schema: strawberry.Schema = request.app.state.schema
    context = GraphQLContext(
        products=ProductRepository(session_maker, timeout=settings.QUERY_TIMEOUT_SECONDS),
    )

    result = await schema.execute(
        params.query,
        variable_values=params.variables,
        context_value=context,
        operation_name=params.operationName,
    )
    return JSONResponse(content=_format_result(result))
