"""Broker Shop - FastAPI Entry Point."""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import database
from .config import SEED_DEMO
from .demo import seed_demo
from .dependencies import get_auth_service
from .log import configure_logging
from .middleware import AuthMiddleware, RequestLoggingMiddleware
from .schemas import ResponseModel

# Import routers
from .routes.auth import router as auth_router
from .routes.admin import router as admin_router
from .routes.categories import router as categories_router
from .routes.products import router as products_router

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    db = database.create_connection()
    try:
        database.init_db(db)
        if SEED_DEMO:
            seed_demo(db)
        get_auth_service(db).cleanup_expired_sessions()
    finally:
        db.close()
    logger.info("application_started", database=str(database.DATABASE_PATH))
    yield
    logger.info("application_stopped")


app = FastAPI(title="Broker Shop", lifespan=lifespan)

# Add middleware (order matters - first added = last executed)
app.add_middleware(AuthMiddleware)
app.add_middleware(RequestLoggingMiddleware)


# Exception handlers: every error leaves in the response envelope

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=ResponseModel.fail(str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content=ResponseModel.fail("Validation failed", jsonable_encoder(exc.errors())).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail("Internal server error").model_dump(),
    )


# Include routers
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(categories_router)
app.include_router(products_router)
