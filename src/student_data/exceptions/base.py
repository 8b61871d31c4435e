"""
Application-level exceptions raised by the data-access layer.

Two kinds are exposed to callers:

- ValidationError (400): input rejected by a schema (database configuration at
  construction time, student DTOs on create/update). Raised before any I/O.
- InternalServerError (500): anything that went wrong while talking to the store
  (connect failure, query failure, timeout, "no row returned").

Both carry a human-friendly `message`, a remediation hint (`action`) and an
HTTP-style `status_code`, so a service layer can turn them into responses
without knowing anything about the database.
"""

from typing import Any


class AppError(Exception):
    """
    Base exception for data-layer errors.

    - message: human-friendly message
    - action: what the caller can do about it
    - status_code: HTTP-style status code
    - cause: the originating exception, if any (also set as __cause__)
    """

    default_message = "An application error occurred"
    default_action = "Try again later."
    default_status_code = 500

    def __init__(
        self,
        message: str | None = None,
        *,
        action: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.action = action or self.default_action
        self.status_code = status_code or self.default_status_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_payload(self) -> dict[str, Any]:
        """
        Return a JSON-serializable dict describing the error.
        Shape:
            {
                "name": "ValidationError",
                "message": "A validation error occurred",
                "action": "Adjust the submitted data and try again.",
                "status_code": 400,
            }
        The cause is intentionally left out: it may contain raw driver messages.
        """
        return {
            "name": self.name,
            "message": self.message,
            "action": self.action,
            "status_code": self.status_code,
        }


class ValidationError(AppError):
    """
    Raised when input fails schema validation.

    `errors` holds the field-level diagnostics, one dict per problem:
        {"field": "ra", "message": "String should have at least 6 characters", "type": "string_too_short"}
    """

    default_message = "A validation error occurred"
    default_action = "Adjust the submitted data and try again."
    default_status_code = 400

    def __init__(
        self,
        message: str | None = None,
        *,
        action: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        cause: BaseException | None = None,
    ):
        # status is fixed: validation problems are always the caller's input
        super().__init__(message, action=action, status_code=400, cause=cause)
        self.errors = list(errors) if errors else []

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]

    def __str__(self) -> str:
        if self.errors:
            return f"{self.message} (fields: {', '.join(self.fields)})"
        return self.message

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = [dict(e) for e in self.errors]
        return payload


class InternalServerError(AppError):
    """Raised for failures that originate in the store or the connection layer."""

    default_message = "An unexpected internal error occurred"
    default_action = "Contact support."
    default_status_code = 500


__all__ = [
    "AppError",
    "ValidationError",
    "InternalServerError",
]
