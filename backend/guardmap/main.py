"""
GuardMap API - Main FastAPI application.

Map-based planning of security and traffic deployments in Diriyah:
geofence locations, the personnel stationed at them and shareable
assignment snapshots.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

from guardmap.config import Settings, get_settings
from guardmap.database import Database
from guardmap.errors import GuardmapError, StorageUnavailableError, ValidationError
from guardmap.logging_config import configure_logging
from guardmap.routers import health, locations, personnel, rpc, snapshots
from guardmap.schema import run_migrations

logger = logging.getLogger(__name__)

VERSION = "0.3.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s in %s mode...", settings.app_name, settings.app_env)
    database = Database(settings)
    app.state.database = database

    if settings.run_migrations_on_startup:
        await run_migrations(database)
    else:
        logger.info("Migrations skipped (RUN_MIGRATIONS_ON_STARTUP=false)")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await database.dispose()


def _error_response(exc: GuardmapError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def guardmap_error_handler(request: Request, exc: GuardmapError) -> JSONResponse:
    if isinstance(exc, StorageUnavailableError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Invalid input is a 400 with the same shape as every other error."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"] if part != "body")
        message = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        message = "Invalid request"

    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": message, "code": ValidationError.code, "errors": errors},
    )


async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Connection failures that escaped a session scope."""
    logger.error("%s %s failed: database unavailable (%s)", request.method, request.url.path, exc)
    return _error_response(StorageUnavailableError("Database unavailable"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Geofence locations, personnel and shared assignments for Diriyah",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    # CORS middleware - allow the map frontend to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GuardmapError, guardmap_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(OperationalError, storage_error_handler)
    app.add_exception_handler(InterfaceError, storage_error_handler)

    # Routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(rpc.router, prefix="/rpc", tags=["RPC"])
    app.include_router(locations.router, prefix="/api", tags=["Locations"])
    app.include_router(personnel.router, prefix="/api/personnel", tags=["Personnel"])
    app.include_router(snapshots.router, prefix="/api/snapshots", tags=["Snapshots"])

    return app


app = create_app()
