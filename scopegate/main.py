# scopegate/main.py

import logging
from typing import Optional
from fastapi import Depends, FastAPI
from fastapi.openapi.utils import get_openapi
from fastapi.responses import RedirectResponse
from contextlib import asynccontextmanager

from scopegate.adapters.configuration.config import settings
from scopegate.adapters.inbound.api.deps import access_guard
from scopegate.adapters.inbound.api.route_policies import RoutePolicyTable, route_policies
from scopegate.adapters.outbound.persistence.database import create_tables, engine

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    logger.info("Application starting up...")

    # Create database tables if they don't exist
    await create_tables()

    yield

    logger.info("Application shutting down...")
    await engine.dispose()


def create_app(policies: Optional[RoutePolicyTable] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Every API route runs behind ``access_guard``; what each route requires
    comes from the route policy table.
    """
    app = FastAPI(
        title="scopegate",
        description="Client-credentials authentication and scope authorization",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
        dependencies=[Depends(access_guard)],
        docs_url="/docs" if settings.SCHEMA_VISIBILITY else None,
        redoc_url="/redoc" if settings.SCHEMA_VISIBILITY else None,
        openapi_url="/openapi.json" if settings.SCHEMA_VISIBILITY else None,
    )
    app.state.route_policies = policies if policies is not None else route_policies

    # Middlewares
    from scopegate.shared.middleware import (
        AsyncExceptionMiddleware,
        AsyncRequestLoggingMiddleware,
        AsyncSecurityHeadersMiddleware
    )

    app.add_middleware(AsyncSecurityHeadersMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware)
    app.add_middleware(AsyncExceptionMiddleware)

    # Routers
    from scopegate.adapters.inbound.api.v1.router import api_router as api_v1_router

    app.include_router(api_v1_router, prefix="/v1")

    @app.get("/", name="docs_redirect", include_in_schema=False)
    async def redirect_to_docs():
        return RedirectResponse(url="/docs")

    @app.get("/health", name="health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        spec = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        # Remove unwanted schemas and 422 responses
        for schema in ("HTTPValidationError", "ValidationError"):
            spec.get("components", {}).get("schemas", {}).pop(schema, None)

        for path in spec.get("paths", {}).values():
            for op in path.values():
                op.get("responses", {}).pop("422", None)

        app.openapi_schema = spec
        return spec

    app.openapi = custom_openapi

    return app


app = create_app()
