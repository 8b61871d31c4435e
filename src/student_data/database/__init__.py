"""
Connection and transaction management.

Usage:
    from student_data.database import Database, QueryOptions
"""

from .base import Base
from .pool import ConnectionPool, ConnectionTimeoutError, build_url, engine_options
from .handles import QueryOptions, QueryResult, Request, Transaction
from .manager import Database

__all__ = [
    "Base",
    "ConnectionPool",
    "ConnectionTimeoutError",
    "build_url",
    "engine_options",
    "QueryOptions",
    "QueryResult",
    "Request",
    "Transaction",
    "Database",
]
