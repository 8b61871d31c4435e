"""
Validate-then-proceed helpers.

Every write path and the database configuration go through `validate_or_raise`
before anything touches the store. Pydantic's error list is flattened into
field-level diagnostics and attached to our ValidationError so callers never
have to import pydantic to inspect what went wrong.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from student_data.exceptions.base import ValidationError

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def format_validation_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    """
    Convert a pydantic ValidationError into a list of diagnostics:
        [{"field": "options.requestTimeout", "message": "...", "type": "int_type"}]
    Nested locations are joined with dots; model-level errors use "__root__".
    """
    diagnostics = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        diagnostics.append(
            {
                "field": loc or "__root__",
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return diagnostics


def validate_or_raise(schema: type[SchemaType], data: Any, *, message: str | None = None) -> SchemaType:
    """
    Validate `data` against `schema` and return the parsed model.

    - `data` may be a mapping or an instance of `schema` (returned as-is).
    - On failure raises ValidationError with the diagnostics in `.errors` and the
      pydantic error as its cause.
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = format_validation_errors(exc)
        # INFO: rejected input is an expected client-level scenario, no stack trace
        logger.info(
            "validation.rejected",
            extra={"schema": schema.__name__, "invalid_fields": [e["field"] for e in errors]},
        )
        raise ValidationError(message, errors=errors, cause=exc) from exc
