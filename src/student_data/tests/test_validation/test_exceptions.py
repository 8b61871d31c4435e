import logging

import pytest

from student_data.exceptions import (
    AppError,
    InternalServerError,
    ValidationError,
    db_error_handler,
    describe_error,
    to_internal_error,
)


class TestErrorTaxonomy:
    def test_validation_error_defaults(self):
        err = ValidationError()

        assert err.status_code == 400
        assert err.message == "A validation error occurred"
        assert err.to_payload() == {
            "name": "ValidationError",
            "message": "A validation error occurred",
            "action": "Adjust the submitted data and try again.",
            "status_code": 400,
        }

    def test_validation_error_carries_field_diagnostics(self):
        errors = [{"field": "ra", "message": "String should have at least 6 characters", "type": "string_too_short"}]
        err = ValidationError("Invalid student", errors=errors)

        assert err.fields == ["ra"]
        assert str(err) == "Invalid student (fields: ra)"
        assert err.to_payload()["errors"] == errors

    def test_internal_error_keeps_cause(self):
        cause = RuntimeError("driver exploded")
        err = InternalServerError("Failed to list students: driver exploded", cause=cause)

        assert err.status_code == 500
        assert err.__cause__ is cause
        assert err.name == "InternalServerError"
        assert "cause" not in err.to_payload()

    def test_both_are_app_errors(self):
        assert isinstance(ValidationError(), AppError)
        assert isinstance(InternalServerError(), AppError)


class TestErrorMapping:
    def test_describe_error_falls_back_for_empty_messages(self):
        assert describe_error(TimeoutError()) == "unknown error"
        assert describe_error(None) == "unknown error"
        assert describe_error(ValueError("bad value")) == "bad value"

    def test_to_internal_error_prefixes_message(self):
        err = to_internal_error("Failed to delete student", ValueError("locked"))
        assert err.message == "Failed to delete student: locked"

    async def test_handler_wraps_foreign_errors(self, caplog):
        with caplog.at_level(logging.ERROR, logger="student_data.exceptions.mapper"):
            with pytest.raises(InternalServerError) as exc_info:
                async with db_error_handler("Failed to get student by ID", student_id=7):
                    raise OSError("connection reset")

        assert exc_info.value.message == "Failed to get student by ID: connection reset"
        assert isinstance(exc_info.value.__cause__, OSError)
        record = next(r for r in caplog.records if r.getMessage() == "Failed to get student by ID")
        assert record.student_id == 7
        assert record.exc_info is not None

    async def test_handler_passes_app_errors_through(self):
        original = ValidationError("Invalid student")

        with pytest.raises(ValidationError) as exc_info:
            async with db_error_handler("Failed to create student"):
                raise original

        assert exc_info.value is original

    async def test_handler_uses_unknown_error_for_blank_messages(self):
        with pytest.raises(InternalServerError) as exc_info:
            async with db_error_handler("Failed to list students"):
                raise TimeoutError()

        assert exc_info.value.message == "Failed to list students: unknown error"
