"""
Connection manager.

`Database` is the single entry point of the data layer:

    db = Database({"server": "localhost", "database": "School", "user": "sa", "password": "..."})
    student = await db.students.get_by_ra("123456")

    tx = await db.begin_transaction()
    await db.students.create({...}, QueryOptions(transaction=tx))
    await tx.commit()

    await db.close()

It validates the configuration up front, opens the connection pool lazily on
first use (at most one live pool per instance), hands out request handles bound
to the pool or to a caller's transaction, and closes the pool on shutdown.
Repositories never touch the pool directly.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from student_data.exceptions.base import InternalServerError
from student_data.exceptions.mapper import describe_error
from student_data.repositories.student_repository import StudentRepository
from student_data.schemas.database import DatabaseConfig
from student_data.validators.schema_validators import validate_or_raise
from .handles import QueryOptions, Request, Transaction
from .pool import ConnectionPool

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the lifecycle of one connection pool and the repositories bound to it.

    Args:
        config: a DatabaseConfig or a mapping with the same fields.

    Raises:
        ValidationError: if the configuration is invalid. Nothing is opened.
    """

    def __init__(self, config: DatabaseConfig | Mapping[str, Any]):
        self.config: DatabaseConfig = validate_or_raise(
            DatabaseConfig, config, message="Invalid database configuration"
        )
        self._pool: ConnectionPool | None = None
        # Serializes first use so concurrent callers share a single pool
        self._pool_lock = asyncio.Lock()

        self.students = StudentRepository(self)

    @property
    def request_timeout(self) -> int:
        return self.config.options.request_timeout

    @property
    def connected(self) -> bool:
        return self._pool is not None and self._pool.connected

    # =================================================================================================================
    # Pool
    # =================================================================================================================

    async def _get_pool(self) -> ConnectionPool:
        """
        Return the live pool, opening a new one if there is none or it is no
        longer connected.

        Raises:
            InternalServerError: if the store cannot be reached.
        """
        pool = self._pool
        if pool is not None and pool.connected:
            return pool

        async with self._pool_lock:
            # Another caller may have opened it while we were waiting
            if self._pool is not None and self._pool.connected:
                return self._pool

            if self._pool is not None:
                stale, self._pool = self._pool, None
                await stale.close()

            pool = ConnectionPool(self.config)
            try:
                await pool.connect()
            except Exception as exc:
                logger.error(
                    f"Failed to connect to the database: {describe_error(exc)}",
                    extra={"url": pool.safe_url},
                )
                raise InternalServerError(
                    f"Failed to connect to the database: {describe_error(exc)}", cause=exc
                ) from exc

            self._pool = pool
            logger.info("Database connection pool opened", extra={"url": pool.safe_url})
            return pool

    # =================================================================================================================
    # Handles
    # =================================================================================================================

    async def get_request(self, options: QueryOptions | None = None) -> Request:
        """
        Return a request handle.

        If `options.transaction` is set the request runs inside that transaction
        and the pool is not touched; otherwise it is bound to the pool.
        """
        transaction = options.transaction if options is not None else None
        if transaction is not None:
            return Request(transaction=transaction, timeout_ms=self.request_timeout)

        pool = await self._get_pool()
        return Request(pool=pool, timeout_ms=self.request_timeout)

    async def begin_transaction(self) -> Transaction:
        """
        Open and begin a new transaction. The caller owns commit()/rollback().
        """
        pool = await self._get_pool()
        return await Transaction(pool).begin()

    # shorter alias
    transaction = begin_transaction

    # =================================================================================================================
    # Shutdown
    # =================================================================================================================

    async def close(self) -> None:
        """Close the pool if one is open. Calling it again is a no-op."""
        async with self._pool_lock:
            if self._pool is None:
                return
            pool, self._pool = self._pool, None
            await pool.close()
            logger.info("Database connection pool closed", extra={"url": pool.safe_url})

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return (
            f"<Database(driver={self.config.driver!r}, server={self.config.server!r}, "
            f"database={self.config.database!r}, connected={self.connected})>"
        )
