"""
GameDB Storage Gateway
Async SQLAlchemy engine with a fixed connection pool and per-call timeouts
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import RowMapping, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlalchemy.sql.expression import Executable

from gamedb.config import Config
from gamedb.errors import (
    ConstraintViolation,
    StorageError,
    StorageTimeout,
    StorageUnavailable,
)
from gamedb.models.tables import metadata

logger = logging.getLogger(__name__)

# Fixed pool settings, not tunable at runtime
QUERY_TIMEOUT = 3.0  # seconds
MAX_OPEN_CONNECTIONS = 10
MAX_IDLE_CONNECTIONS = 10
CONNECTION_LIFETIME = 180  # seconds

T = TypeVar("T")


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a write statement"""
    rowcount: int
    inserted_primary_key: Optional[int] = None


def engine_kwargs(database_url: str) -> Dict[str, Any]:
    """Get engine configuration based on database type"""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return {"poolclass": NullPool}  # No connection pooling for SQLite
    return {
        "pool_size": MAX_IDLE_CONNECTIONS,
        "max_overflow": MAX_OPEN_CONNECTIONS - MAX_IDLE_CONNECTIONS,
        "pool_recycle": CONNECTION_LIFETIME,
        "pool_timeout": QUERY_TIMEOUT,
        "pool_pre_ping": True,  # Verify connections before using
    }


class StorageGateway:
    """Owns the pooled engine and runs bounded statements against it"""

    def __init__(self, database_url: str, echo: bool = False, create_schema: bool = True):
        self.database_url = database_url
        self.create_schema = create_schema
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            **engine_kwargs(database_url),
        )

    @classmethod
    def from_config(cls, config: Config) -> "StorageGateway":
        return cls(
            config.DATABASE_URL,
            echo=config.DB_ECHO,
            create_schema=config.DB_CREATE_SCHEMA,
        )

    async def _run_with_timeout(self, awaitable: Awaitable[T], timeout: float) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError:
            logger.error(f"Storage call exceeded {timeout}s timeout")
            raise StorageTimeout(f"storage call exceeded {timeout}s")

    async def execute(self, statement: Executable, timeout: float = QUERY_TIMEOUT) -> ExecutionResult:
        """Run a write statement in its own transaction"""

        async def run() -> ExecutionResult:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement)
                inserted = None
                if result.is_insert and result.inserted_primary_key:
                    inserted = result.inserted_primary_key[0]
                return ExecutionResult(rowcount=result.rowcount, inserted_primary_key=inserted)

        try:
            return await self._run_with_timeout(run(), timeout)
        except IntegrityError as e:
            logger.warning(f"Constraint violation: {e.orig}")
            raise ConstraintViolation(str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.error(f"Statement failed: {e}")
            raise StorageError(str(e)) from e

    async def query(self, statement: Executable, timeout: float = QUERY_TIMEOUT) -> List[RowMapping]:
        """Run a read statement and return its rows as mappings"""

        async def run() -> List[RowMapping]:
            async with self.engine.connect() as conn:
                result = await conn.execute(statement)
                return list(result.mappings().all())

        try:
            return await self._run_with_timeout(run(), timeout)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}")
            raise StorageError(str(e)) from e

    async def connect(self) -> None:
        """
        Verify connectivity and create the catalog table when configured.
        Called on application startup; failure here is fatal.
        """
        self._ensure_sqlite_directory()
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if self.create_schema:
                    await conn.run_sync(metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.critical(f"Database initialization error: {e}")
            raise StorageUnavailable(str(e)) from e
        logger.info(f"Database connected: {self._safe_url()}")

    async def check_health(self) -> dict:
        """
        Check database connection.

        Returns:
            dict with status, connected, timestamp, and optional error
        """
        try:
            await self._run_with_timeout(self._ping(), QUERY_TIMEOUT)
        except (SQLAlchemyError, OSError, StorageError) as e:
            logger.error(f"Database health check failed: {e}")
            return {"status": "error", "connected": False, "error": str(e)}
        return {
            "status": "ok",
            "connected": True,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def _ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close database connection pool"""
        await self.engine.dispose()
        logger.info("Database connections closed")

    def _ensure_sqlite_directory(self) -> None:
        url = make_url(self.database_url)
        if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
            return
        parent = Path(url.database).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.critical(f"Cannot create database directory {parent}: {e}")
            raise StorageUnavailable(str(e)) from e

    def _safe_url(self) -> str:
        return make_url(self.database_url).render_as_string(hide_password=True)
