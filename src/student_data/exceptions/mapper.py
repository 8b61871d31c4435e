import logging
from contextlib import asynccontextmanager

from .base import AppError, InternalServerError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "unknown error"


def describe_error(exc: BaseException | None) -> str:
    """
    Return the message of `exc`, or "unknown error" when it has none
    (e.g. a bare TimeoutError).
    """
    if exc is None:
        return UNKNOWN_ERROR
    return str(exc) or UNKNOWN_ERROR


def to_internal_error(prefix: str, exc: BaseException) -> InternalServerError:
    """Build an InternalServerError whose message is '<prefix>: <cause message>'."""
    return InternalServerError(f"{prefix}: {describe_error(exc)}", cause=exc)


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(prefix: str, **context):
    """
    Usage:
        async with db_error_handler("Failed to get student by ID", student_id=student_id):
            ... statements that may raise driver errors ...

    Errors from the taxonomy (ValidationError, InternalServerError) pass through
    untouched. Anything else is logged with its stack and re-raised as an
    InternalServerError carrying the original message.
    """
    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        logger.exception(prefix, extra={"operation": prefix, **context})
        raise to_internal_error(prefix, exc) from exc
