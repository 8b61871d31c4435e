import logging

import pytest

from student_data.exceptions import ValidationError
from student_data.schemas import CreateStudentDTO, DatabaseConfig, Student, UpdateStudentDTO
from student_data.validators import format_validation_errors, validate_or_raise


class TestValidateOrRaise:
    def test_returns_parsed_model(self):
        dto = validate_or_raise(CreateStudentDTO, {"ra": "123456", "name": "Ana", "email": "ana@example.com"})

        assert isinstance(dto, CreateStudentDTO)
        assert dto.ra == "123456"

    def test_model_instances_are_accepted(self):
        dto = CreateStudentDTO(ra="123456", name="Ana", email="ana@example.com")
        assert validate_or_raise(CreateStudentDTO, dto) == dto

    def test_collects_every_invalid_field(self, caplog):
        with caplog.at_level(logging.INFO, logger="student_data.validators.schema_validators"):
            with pytest.raises(ValidationError) as exc_info:
                validate_or_raise(CreateStudentDTO, {"ra": "1", "name": "A", "email": "nope"})

        err = exc_info.value
        assert sorted(err.fields) == ["email", "name", "ra"]
        assert all(e["message"] and e["type"] for e in err.errors)
        assert err.message == "A validation error occurred"

        record = next(r for r in caplog.records if r.getMessage() == "validation.rejected")
        assert record.schema == "CreateStudentDTO"

    def test_custom_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_or_raise(DatabaseConfig, {}, message="Invalid database configuration")

        assert exc_info.value.message == "Invalid database configuration"
        assert {"server", "database", "user", "password"} <= set(exc_info.value.fields)

    def test_nested_locations_are_dotted(self):
        from pydantic import ValidationError as PydanticValidationError

        with pytest.raises(PydanticValidationError) as exc_info:
            DatabaseConfig.model_validate(
                {"server": "s", "database": "d", "user": "u", "password": "p", "options": {"connectionTimeout": 0}}
            )

        assert format_validation_errors(exc_info.value)[0]["field"] == "options.connectionTimeout"


class TestStudentSchemas:
    def test_update_changes_only_present_fields(self):
        assert UpdateStudentDTO().changes() == {}
        assert UpdateStudentDTO(name="Ana Maria").changes() == {"name": "Ana Maria"}

    def test_student_accepts_store_column_names(self):
        student = Student.model_validate(
            {
                "id": 1,
                "ra": "123456",
                "name": "Ana",
                "email": "ana@example.com",
                "createdAt": "2024-01-01T10:00:00",
                "updatedAt": "2024-01-02T10:00:00",
            }
        )

        assert student.created_at.year == 2024
        assert student.updated_at.day == 2

    def test_database_config_none_options_use_defaults(self):
        config = DatabaseConfig.model_validate(
            {"server": "s", "database": "d", "user": "u", "password": "p", "options": None}
        )
        assert config.options.request_timeout == 30_000
        assert config.backend == "mssql"

    def test_database_config_rejects_string_port(self):
        with pytest.raises(ValidationError):
            validate_or_raise(
                DatabaseConfig, {"server": "s", "database": "d", "user": "u", "password": "p", "port": "1433"}
            )
