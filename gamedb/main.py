"""
GameDB API - FastAPI Main Application
CRUD service over the game catalog table
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gamedb.config import Config, ConfigError
from gamedb.db import StorageGateway
from gamedb.errors import ConstraintViolation, StorageError
from gamedb.middleware import allow_cross_origin, inject_trace_id
from gamedb.routers import gamedb
from gamedb.services.catalog import CatalogRepository

logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "GameDB API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Catalog of purchasable game entries"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the storage gateway on startup, dispose it on shutdown"""
    logger.info(f"Starting {APP_NAME}...")
    # StorageUnavailable propagates and aborts startup
    await app.state.gateway.connect()
    app.state.ready = True
    logger.info(f"{APP_NAME} started successfully")
    yield
    app.state.ready = False
    await app.state.gateway.close()
    logger.info(f"{APP_NAME} shut down successfully")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Undecodable request body"""
    logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Status-only responses for routing and path errors"""
    return Response(status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    """Write rejected by the store, e.g. a duplicate gameid"""
    logger.warning(f"{request.method} {request.url.path} rejected by store: {exc}")
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


async def storage_error_handler(request: Request, exc: StorageError):
    """Database I/O failure or timeout"""
    logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(config: Optional[Config] = None, gateway: Optional[StorageGateway] = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Settings; read from the environment when omitted
        gateway: Storage gateway; built from config when omitted
    """
    config = config or Config()
    gateway = gateway or StorageGateway.from_config(config)

    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description=APP_DESCRIPTION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.gateway = gateway
    app.state.repository = CatalogRepository(gateway)
    app.state.start_time = time.time()
    app.state.ready = False

    # Last added runs first: tracing wraps CORS
    app.middleware("http")(allow_cross_origin)
    app.middleware("http")(inject_trace_id)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ConstraintViolation, constraint_violation_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(gamedb.router)

    @app.get("/healthz")
    async def health_check():
        """Liveness check"""
        return JSONResponse(
            content={
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": time.time() - app.state.start_time,
            }
        )

    @app.get("/readyz")
    async def readiness_check(request: Request):
        """Readiness check with a database ping"""
        trace_id = getattr(request.state, "trace_id", None)
        if not app.state.ready:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "traceId": trace_id},
            )

        db_health = await app.state.gateway.check_health()
        if db_health["status"] != "ok":
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "degraded",
                    "db": db_health["status"],
                    "db_error": db_health.get("error"),
                    "ts": datetime.now(timezone.utc).isoformat(),
                    "traceId": trace_id,
                },
            )
        return JSONResponse(
            content={
                "status": "ok",
                "db": "ok",
                "ts": db_health["timestamp"],
                "traceId": trace_id,
            }
        )

    return app


def run() -> None:
    """Start the HTTP listener"""
    import uvicorn

    try:
        config = Config()
    except ConfigError as e:
        configure_logging()
        logger.error(f"Configuration Error: {e}")
        raise SystemExit(1)
    configure_logging(config.APP_LOG_LEVEL)
    uvicorn.run(
        create_app(config),
        host=config.APP_HOST,
        port=config.APP_PORT,
        log_level=config.APP_LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
