"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.mk_catalog.api.router import router as products_router
from src.mk_catalog.infrastructure.seed import ensure_seeded
from src.mk_chat.api.router import router as chats_router
from src.mk_chat.application.service import get_conversation_manager
from src.mk_common.database import dispose_engine, get_engine
from src.mk_common.errors import AppError
from src.mk_common.response import error_response
from src.mk_discovery.api.router import router as discovery_router
from src.mk_favorites.api.router import router as favorites_router
from src.mk_gateway.api.router import router as auth_router
from src.mk_gateway.middleware.request_log import RequestLogMiddleware
from src.mk_mirror.api.router import router as mirror_router
from src.mk_reputation.api.router import router as sellers_router
from src.mk_store.provider import close_store, get_store

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: open the store, seed demo data, verify the mirror DB.

    Shutdown: let pending chat replies land, then close connections.
    """
    # Startup
    store = await get_store()
    seeded = await ensure_seeded(
        store, count=settings.SEED_RANDOM_COUNT, seed=settings.SEED_RANDOM_SEED
    )
    logger.info("Store ready (backend=%s, seeded=%s)", settings.STORE_BACKEND, seeded)
    if settings.MIRROR_ENABLED:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    yield
    # Shutdown
    await get_conversation_manager().drain()
    await close_store()
    await dispose_engine()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, request)
    if exc.http_status >= 500:
        logger.warning("%s (code=%d) %s", type(exc).__name__, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(products_router, prefix="/api/v1")
app.include_router(discovery_router, prefix="/api/v1")
app.include_router(favorites_router, prefix="/api/v1")
app.include_router(sellers_router, prefix="/api/v1")
app.include_router(chats_router, prefix="/api/v1")

if settings.MIRROR_ENABLED:
    app.include_router(mirror_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0", "store": settings.STORE_BACKEND}
