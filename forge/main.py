"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from forge.api.v1 import api_router
from forge.core.config import get_settings
from forge.core.exceptions import (
    ForgeError,
    HealthBridgeError,
    InvalidMeasurementError,
    InvalidTransitionError,
    NotFoundError,
    PersistenceError,
    PreconditionError,
)
from forge.db.session import engine

logger = logging.getLogger(__name__)

settings = get_settings()

# Most specific class first; looked up along the raised error's MRO
STATUS_BY_ERROR: dict[type[ForgeError], int] = {
    NotFoundError: 404,
    InvalidTransitionError: 409,
    InvalidMeasurementError: 422,
    PreconditionError: 422,
    HealthBridgeError: 502,
    PersistenceError: 503,
}


def status_for(exc: ForgeError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


async def forge_error_handler(request: Request, exc: ForgeError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=status_code, content={"detail": exc.detail})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Shutdown: dispose the engine. Tables are managed by Alembic."""
    yield
    await engine.dispose()


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ForgeError, forge_error_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Forge Workout API"}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
