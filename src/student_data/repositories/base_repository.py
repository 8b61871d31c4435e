"""
Base repository class providing the plumbing shared by repositories.

A repository never owns a connection. It asks its DatabaseContext (normally
`Database`) for a request handle on every call, passing along the caller's
QueryOptions, so any operation can run standalone or inside a caller-supplied
transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sqlalchemy.sql import Executable

    from student_data.database.handles import QueryOptions, QueryResult, Request

logger = logging.getLogger(__name__)


class DatabaseContext(Protocol):
    """Anything that can issue request handles."""

    async def get_request(self, options: QueryOptions | None = None) -> Request: ...


class BaseRepository:
    """
    Shared helpers for repositories bound to a DatabaseContext.

    Subclasses build SQLAlchemy statements and run them through `_execute`.
    """

    def __init__(self, db: DatabaseContext):
        self.db = db

    async def get_request(self, options: QueryOptions | None = None) -> Request:
        return await self.db.get_request(options)

    async def _execute(self, statement: Executable, options: QueryOptions | None = None) -> QueryResult:
        """Acquire a request handle for `options` and run `statement` on it."""
        request = await self.get_request(options)
        logger.debug("repo.execute", extra={"repository": type(self).__name__, "request": repr(request)})
        return await request.execute(statement)
