# app/main.py
import logging
import time
from contextlib import asynccontextmanager
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Security
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.security import APIKeyHeader
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .errors import AppError, error_response, translate_error
from .handlers import (
    create_product_logic, delete_product_logic, get_product_logic,
    list_products_logic, product_stats_logic, update_product_logic,
)
from .models import DeletedProduct, ErrorBody, Product, ProductIn, ProductPage, ProductStats
from .observability import setup_logging
from .pipeline import RequestContext, build_pipeline

logger = logging.getLogger(__name__)

SERVICE_NAME = "products-api"

# Documents the key header in OpenAPI; the pipeline does the actual check.
api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


StoreDependency = Annotated[ProductStore, Depends(get_store)]


def _errors(*codes: int) -> Dict[int, Dict[str, Any]]:
    return {code: {"model": ErrorBody} for code in codes}


_PRODUCT_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": ProductIn.model_json_schema(by_alias=True),
                "example": {
                    "name": "New", "description": "desc", "price": 10.5,
                    "category": "gadgets", "inStock": True,
                },
            },
        },
    },
}


# ---------------------------
# Product endpoints
# ---------------------------
def build_router(settings: Settings) -> APIRouter:
    router = APIRouter(
        prefix=settings.api_prefix,
        tags=["products"],
        dependencies=[Security(api_key_header)],
    )

    def pipeline(handler, validate=False):
        return build_pipeline(
            handler, settings.api_key, validate=validate,
            include_stack=settings.is_development,
        )

    list_pipeline = pipeline(list_products_logic)
    get_pipeline = pipeline(get_product_logic)
    create_pipeline = pipeline(create_product_logic, validate=True)
    update_pipeline = pipeline(update_product_logic, validate=True)
    delete_pipeline = pipeline(delete_product_logic)
    stats_pipeline = pipeline(product_stats_logic)

    @router.get("/products", response_model=ProductPage, responses=_errors(401))
    async def list_products(
        request: Request,
        store: StoreDependency,
        category: Optional[str] = Query(None, description="Case-insensitive category match"),
        search: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
        page: Optional[str] = Query(None, description="1-based page, default 1"),
        limit: Optional[str] = Query(None, description="Page size, default 10"),
    ):
        query = {"category": category, "search": search, "page": page, "limit": limit}
        ctx = RequestContext(store=store, headers=request.headers, query=query)
        return list_pipeline.run(ctx)

    @router.get("/products/{product_id}", response_model=Product, responses=_errors(401, 404))
    async def get_product(product_id: str, request: Request, store: StoreDependency):
        ctx = RequestContext(store=store, headers=request.headers, path_params={"product_id": product_id})
        return get_pipeline.run(ctx)

    @router.post(
        "/products", status_code=201, response_model=Product,
        responses=_errors(400, 401), openapi_extra=_PRODUCT_BODY,
    )
    async def create_product(request: Request, store: StoreDependency):
        ctx = RequestContext(store=store, headers=request.headers, body=await request.body())
        return create_pipeline.run(ctx)

    @router.put(
        "/products/{product_id}", response_model=Product,
        responses=_errors(400, 401, 404), openapi_extra=_PRODUCT_BODY,
    )
    async def update_product(product_id: str, request: Request, store: StoreDependency):
        ctx = RequestContext(
            store=store, headers=request.headers,
            path_params={"product_id": product_id}, body=await request.body(),
        )
        return update_pipeline.run(ctx)

    @router.delete("/products/{product_id}", response_model=DeletedProduct, responses=_errors(401, 404))
    async def delete_product(product_id: str, request: Request, store: StoreDependency):
        ctx = RequestContext(store=store, headers=request.headers, path_params={"product_id": product_id})
        return delete_pipeline.run(ctx)

    @router.get("/products-stats", response_model=ProductStats, responses=_errors(401))
    async def product_stats(request: Request, store: StoreDependency):
        ctx = RequestContext(store=store, headers=request.headers)
        return stats_pipeline.run(ctx)

    return router


# ---------------------------
# System endpoints
# ---------------------------
system_router = APIRouter(tags=["system"])


@system_router.get("/", response_class=PlainTextResponse)
async def read_root():
    return "Hello World - products API is up!"


@system_router.get("/health")
async def health():
    return {"status": "ok", "service": SERVICE_NAME}


# ---------------------------
# Error handlers (outside the pipeline: unknown routes, bad methods)
# ---------------------------
def register_error_handlers(app: FastAPI, include_stack: bool) -> None:
    async def handle(request: Request, exc: Exception):
        return error_response(translate_error(exc), include_stack=include_stack)

    app.add_exception_handler(AppError, handle)
    app.add_exception_handler(StarletteHTTPException, handle)
    app.add_exception_handler(RequestValidationError, handle)
    app.add_exception_handler(Exception, handle)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        if settings.uses_default_api_key:
            logger.warning("API_KEY is not set; using the built-in default key")
        logger.info("Products API started (%d products loaded)", len(app.state.store))
        yield
        logger.info("Products API shutting down")

    app = FastAPI(
        title="Products API",
        description="CRUD API for products with API-key auth, validation, filtering, pagination, search and stats",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            # unhandled errors propagate to the server-error handler; still log them as 500
            logger.info(
                "%s %s %s", request.method, request.url.path, status_code,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response

    app.include_router(system_router)
    app.include_router(build_router(settings))
    register_error_handlers(app, include_stack=settings.is_development)
    return app


app = create_app()
