from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from contextlib import asynccontextmanager
import logging

from product_api.core.config import Settings, settings as default_settings
from product_api.core.logging import setup_logging
from product_api.core.security import SecurityHeadersMiddleware
from product_api.graphql.schema import build_schema
from product_api.routers import graphql

from product_api.core.db import (
    build_engine,
    build_sessionmaker,
    create_schema_if_needed,
    wait_for_db,
)

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.engine = engine or build_engine(settings)
        app.state.sessionmaker = build_sessionmaker(app.state.engine)
        await wait_for_db(app.state.engine, max_attempts=settings.DB_STARTUP_ATTEMPTS)
        if settings.DB_CREATE_SCHEMA:
            await create_schema_if_needed(app.state.engine)
        log.info("Product API ready (env=%s)", settings.APP_ENV)
        try:
            yield
        finally:
            # an injected engine belongs to the caller
            if engine is None:
                await app.state.engine.dispose()

    app = FastAPI(
        title="Product API",
        version="0.1.0",
        lifespan=lifespan,
        debug=not settings.is_production,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.schema = build_schema()

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=0, compresslevel=9)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Length"],
    )

    app.include_router(graphql.router)
    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_api.main:app",
        host="0.0.0.0",
        port=default_settings.APP_PORT,
        reload=not default_settings.is_production,
        log_level="info" if default_settings.is_production else "debug",
    )
