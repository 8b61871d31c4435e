"""
Connection pool wrapper.

A ConnectionPool owns one SQLAlchemy AsyncEngine (which is the actual pool of
DBAPI connections) built from a validated DatabaseConfig. Opening the pool
performs a connectivity probe bounded by `connection_timeout`, so a pool that
reports `connected` has talked to the store at least once.
"""

import asyncio
import logging
import math
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from student_data.schemas.database import DatabaseConfig

logger = logging.getLogger(__name__)


class ConnectionTimeoutError(TimeoutError):
    """No connection to the store could be established within `connection_timeout`."""


def build_url(config: DatabaseConfig) -> URL:
    """
    Build the SQLAlchemy URL for `config`.

    - sqlite: only the database (file path) is used.
    - mssql: encryption flags are passed as ODBC connection attributes.
    """
    if config.backend == "sqlite":
        return URL.create(config.driver, database=config.database)

    query: dict[str, str] = {}
    if config.backend == "mssql":
        opts = config.options
        query = {
            "driver": opts.odbc_driver,
            "Encrypt": "yes" if opts.encrypt else "no",
            "TrustServerCertificate": "yes" if opts.trust_server_certificate else "no",
        }

    return URL.create(
        config.driver,
        username=config.user,
        password=config.password,
        host=config.server,
        port=config.port,
        database=config.database,
        query=query,
    )


def engine_options(config: DatabaseConfig) -> dict[str, Any]:
    """
    Keyword arguments for create_async_engine.

    For mssql the ODBC login timeout (whole seconds) is derived from
    `connection_timeout`, so every new DBAPI connection is bounded by the
    driver as well, including pool growth and pre-ping reconnects.
    """
    options: dict[str, Any] = {"pool_pre_ping": True}
    if config.backend == "mssql":
        options["connect_args"] = {"timeout": math.ceil(config.options.connection_timeout / 1000)}
    return options


def _enable_arith_abort(dbapi_connection, connection_record) -> None:
    # runs once per new DBAPI connection
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("SET ARITHABORT ON")
    finally:
        cursor.close()


class ConnectionPool:
    """
    Lifecycle of a single AsyncEngine: connect(), connected, close().

    Not safe to share between Database instances; the owning Database decides
    when a pool is created or replaced.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.url = build_url(config)
        self._engine: AsyncEngine | None = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Connection pool is not connected")
        return self._engine

    @property
    def safe_url(self) -> str:
        """URL rendered with the password hidden, for logs."""
        return self.url.render_as_string(hide_password=True)

    def _create_engine(self) -> AsyncEngine:
        engine = create_async_engine(self.url, **engine_options(self.config))
        if self.config.backend == "mssql" and self.config.options.enable_arith_abort:
            event.listen(engine.sync_engine, "connect", _enable_arith_abort)
        return engine

    async def _probe(self, engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> "ConnectionPool":
        """
        Create the engine and check that the store is reachable.

        Raises:
            ConnectionTimeoutError: if the probe exceeds `connection_timeout`.
            Exception: whatever the driver raised while connecting.
        The engine is disposed on failure so no connections are left behind.
        """
        if self._engine is not None:
            return self

        timeout_ms = self.config.options.connection_timeout
        engine = self._create_engine()
        try:
            await asyncio.wait_for(self._probe(engine), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as exc:
            await engine.dispose()
            raise ConnectionTimeoutError(f"connection attempt timed out after {timeout_ms} ms") from exc
        except Exception:
            await engine.dispose()
            raise

        self._engine = engine
        logger.debug("Connection pool connected", extra={"url": self.safe_url})
        return self

    async def acquire(self) -> AsyncConnection:
        """
        Check out a connection, bounded by `connection_timeout`.

        Raises:
            ConnectionTimeoutError: if no connection is established in time.
        """
        timeout_ms = self.config.options.connection_timeout
        try:
            return await asyncio.wait_for(self.engine.connect().start(), timeout=timeout_ms / 1000)
        except asyncio.TimeoutError as exc:
            raise ConnectionTimeoutError(f"connection attempt timed out after {timeout_ms} ms") from exc

    async def close(self) -> None:
        """Dispose the engine and every pooled connection. Safe to call twice."""
        engine, self._engine = self._engine, None
        if engine is not None:
            await engine.dispose()
            logger.debug("Connection pool disposed", extra={"url": self.safe_url})
