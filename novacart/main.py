# novacart/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from novacart.api import api_router
from novacart.data.database import Base, engine
from novacart.data import models  # noqa: F401  registers every model in Base.metadata
from novacart.domain.errors import ServiceError
from novacart.repos.catalog_store import build_catalog_store
from novacart.repos.snapshot import ProductSnapshot
from novacart.services.catalog_service import CatalogResolver
from novacart.utils.retry import sql_retry
from novacart.utils.settings import FRONTEND_URL, PORT, PRODUCTS_SNAPSHOT_PATH
from novacart.utils.logging import get_logger

logger = get_logger(__name__)


@sql_retry()
def init_db():
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def build_catalog() -> CatalogResolver:
    return CatalogResolver(
        store=build_catalog_store(),
        snapshot=ProductSnapshot(PRODUCTS_SNAPSHOT_PATH),
    )


# =====================================================
# ERROR HANDLERS - every error body is {"message": ...}
# =====================================================
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
        message = f"Invalid {field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"message": message})


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception):
    #details stay in the server log
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Server error"})


def create_app(catalog: CatalogResolver | None = None) -> FastAPI:
    app = FastAPI(
        title="NovaCart API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.state.catalog = catalog or build_catalog()

    app.include_router(api_router)

    return app


app = create_app()


def run():
    uvicorn.run("novacart.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
