# src/student_data/core/logging/filters.py
"""
Logging filters

- OperationIdFilter: guarantees every LogRecord has an `operation_id` attribute
  so formatters can reference `%(operation_id)s`. The id lives in a ContextVar,
  which follows the logical flow across `await` boundaries, so all log lines of
  one unit of work (e.g. a transaction spanning several repository calls) can be
  correlated. Records without an id get the sentinel "-".

- RedactFilter: masks sensitive attributes (passwords, tokens, ...) attached to
  a record through `extra={...}`, including values nested in dicts.

Usage:
    token = set_operation_id("import-42")
    try:
        await db.students.create(...)
    finally:
        reset_operation_id(token)
"""

import logging
from logging import LogRecord
import contextvars
from typing import Any

# operation id for the current execution context (async task / logical flow)
_operation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation_id", default=None
)


def set_operation_id(operation_id: str | None):
    """
    Set the operation id in the current context and return the token to allow reset.
    """
    return _operation_id_ctx.set(operation_id)


def reset_operation_id(token) -> None:
    """
    Reset the contextvar to the previously saved token returned by set_operation_id().
    """
    _operation_id_ctx.reset(token)


def get_operation_id() -> str | None:
    return _operation_id_ctx.get()


class OperationIdFilter(logging.Filter):
    """
    Set `record.operation_id` to, in order of preference:
      * the value passed explicitly via extra={"operation_id": ...}
      * the contextvar value
      * "-"
    Always returns True: the filter only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        record.operation_id = (
            getattr(record, "operation_id", None) or get_operation_id() or "-"
        )
        return True


REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "pwd",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "connection_string",
    }

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: REDACTED if str(k).lower() in self.SENSITIVE else self._scrub(v)
                for k, v in value.items()
            }
        return value

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            elif isinstance(record.__dict__[key], dict):
                record.__dict__[key] = self._scrub(record.__dict__[key])
        return True
