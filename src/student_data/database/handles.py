"""
Request and transaction handles issued by `Database`.

- Request: one unit of work. Bound either to the pool (checks out a connection
  within `connection_timeout`, then runs in its own short transaction that
  commits on success) or to an open Transaction (runs on the transaction's
  connection). Every statement is bounded by `request_timeout`.
- Transaction: caller-owned multi-statement unit. The caller must commit or
  roll back; `async with` does it automatically.
- QueryOptions: per-call options passed to repository methods; setting
  `transaction` makes the call participate in that transaction.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncTransaction
from sqlalchemy.sql import Executable

from student_data.exceptions.mapper import to_internal_error
from .pool import ConnectionPool, ConnectionTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class QueryResult:
    """Buffered result of a single statement."""

    rows: list[RowMapping] = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> RowMapping | None:
        return self.rows[0] if self.rows else None


async def _run_statement(conn: AsyncConnection, statement: Executable) -> QueryResult:
    result = await conn.execute(statement)
    rows = list(result.mappings().all()) if result.returns_rows else []
    return QueryResult(rows=rows, rowcount=result.rowcount)


class Transaction:
    """
    An explicit transaction on a dedicated pooled connection.

    Usage:
        tx = await db.begin_transaction()
        try:
            await db.students.create(data, QueryOptions(transaction=tx))
            await tx.commit()
        except Exception:
            await tx.rollback()
            raise

    or:
        async with await db.begin_transaction() as tx:
            ...
    """

    def __init__(self, pool: ConnectionPool):
        self._pool = pool
        self._connection: AsyncConnection | None = None
        self._transaction: AsyncTransaction | None = None

    @property
    def active(self) -> bool:
        return self._transaction is not None and self._transaction.is_active

    @property
    def connection(self) -> AsyncConnection:
        if not self.active:
            raise RuntimeError("Transaction is not active")
        return self._connection

    async def begin(self) -> "Transaction":
        if self._transaction is not None:
            raise RuntimeError("Transaction already begun")
        try:
            self._connection = await self._pool.acquire()
            self._transaction = await self._connection.begin()
        except Exception as exc:
            await self._release()
            raise to_internal_error("Failed to begin transaction", exc) from exc
        logger.debug("Transaction started")
        return self

    async def commit(self) -> None:
        try:
            await self.connection.commit()
        except Exception as exc:
            raise to_internal_error("Failed to commit transaction", exc) from exc
        finally:
            await self._release()
        logger.debug("Transaction committed")

    async def rollback(self) -> None:
        try:
            await self.connection.rollback()
        except Exception as exc:
            raise to_internal_error("Failed to roll back transaction", exc) from exc
        finally:
            await self._release()
        logger.debug("Transaction rolled back")

    async def _release(self) -> None:
        connection, self._connection = self._connection, None
        self._transaction = None
        if connection is not None:
            await connection.close()

    async def __aenter__(self) -> "Transaction":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.active:
            return
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()


@dataclass
class QueryOptions:
    transaction: Transaction | None = None


class Request:
    """A single statement executor bound to the pool or to a transaction."""

    def __init__(
        self,
        *,
        pool: ConnectionPool | None = None,
        transaction: Transaction | None = None,
        timeout_ms: int,
    ):
        if (pool is None) == (transaction is None):
            raise ValueError("Request needs exactly one of pool or transaction")
        self._pool = pool
        self._transaction = transaction
        self.timeout_ms = timeout_ms

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    async def execute(self, statement: Executable) -> QueryResult:
        """
        Execute `statement` and buffer its rows.

        Raises:
            TimeoutError: if it runs longer than `timeout_ms`.
            ConnectionTimeoutError: if no pooled connection could be opened
                within `connection_timeout`.
            Exception: driver errors are propagated untouched; repositories
                translate them.
        """
        try:
            return await asyncio.wait_for(self._execute(statement), timeout=self.timeout_ms / 1000)
        except ConnectionTimeoutError:
            raise
        except asyncio.TimeoutError as exc:
            raise TimeoutError(f"request timed out after {self.timeout_ms} ms") from exc

    async def _execute(self, statement: Executable) -> QueryResult:
        if self._transaction is not None:
            return await _run_statement(self._transaction.connection, statement)

        conn = await self._pool.acquire()
        try:
            async with conn.begin():
                return await _run_statement(conn, statement)
        finally:
            await conn.close()

    def __repr__(self) -> str:
        target = "transaction" if self.in_transaction else "pool"
        return f"<Request(bound={target}, timeout_ms={self.timeout_ms})>"
