# Standard library
import time
import uuid
from contextlib import asynccontextmanager

# Third party
import yaml
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

# Local imports
from catalog_api.core.config import settings
from catalog_api.core.logging import get_logger
import catalog_api.api as api


logger = get_logger(__name__)


async def _prepare_database():
    from catalog_api.db.base import engine, init_models

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info(f"Connected to {engine.url.render_as_string(hide_password=True)}")

    if settings.CREATE_TABLES_ON_STARTUP:
        await init_models()
        logger.info("Catalog tables ensured")
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ping the catalog database on startup and release its pool on shutdown"""
    logger.info("Catalog API starting up")
    try:
        engine = await _prepare_database()
    except Exception as e:
        logger.error(f"Catalog database unavailable: {e}")
        raise

    yield

    await engine.dispose()
    logger.info("Catalog API stopped")


async def integrity_error_handler(request: Request, exc: IntegrityError):
    # Routes translate the conflicts they expect; this catches the rest
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflicting change detected, please retry the request"},
    )


def create_app() -> FastAPI:
    """Build the catalog application: routers, middleware and the YAML schema route"""

    app = FastAPI(
        title="Catalog API",
        description="CRUD API for products and hierarchical product categories.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    for name, router in api.api_routers:
        app.include_router(router, prefix=settings.API_PREFIX, tags=[name])
    app.include_router(api.health_router, tags=["health"])

    app.add_exception_handler(IntegrityError, integrity_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed "
                f"after {time.perf_counter() - started:.4f}s",
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.6f}"

        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed:.4f}s)")
        return response

    @app.get("/openapi.yaml", include_in_schema=False)
    async def openapi_yaml():
        """The OpenAPI document rendered as YAML"""
        document = app.openapi_schema or get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        return Response(
            content=yaml.safe_dump(document, sort_keys=False),
            media_type="application/x-yaml",
        )

    return app


app = create_app()
