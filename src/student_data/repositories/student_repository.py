"""
Student repository.

Translates Student operations into parameterized SQLAlchemy statements against
the `Students` table and shapes rows back into `Student` models.

Error policy (same for every method):
  - malformed input -> ValidationError, raised before any statement is built
  - anything that fails while executing -> InternalServerError whose message
    is "<operation prefix>: <original message>"
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update

from student_data.exceptions.base import InternalServerError
from student_data.exceptions.mapper import db_error_handler
from student_data.models.student import students_table
from student_data.schemas.student import CreateStudentDTO, Student, UpdateStudentDTO
from student_data.validators.schema_validators import validate_or_raise
from .base_repository import BaseRepository

if TYPE_CHECKING:
    from student_data.database.handles import QueryOptions, QueryResult

logger = logging.getLogger(__name__)

# Columns a patch is allowed to touch, in SET-clause order
UPDATABLE_COLUMNS = ("name", "email")


def _to_student(row: Mapping[str, Any]) -> Student:
    return Student.model_validate(dict(row))


class StudentRepository(BaseRepository):
    """
    CRUD for the Student entity.

    Every method accepts an optional QueryOptions; pass
    `QueryOptions(transaction=tx)` to run it inside a transaction.
    """

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def _get_one(self, statement, options: QueryOptions | None) -> Student | None:
        result: QueryResult = await self._execute(statement, options)
        row = result.first()
        return _to_student(row) if row is not None else None

    async def get_by_ra(self, ra: str, options: QueryOptions | None = None) -> Student | None:
        """
        Get a student by registration code.

        Returns:
            The Student if found, None otherwise
        """
        async with db_error_handler("Failed to get student by RA", ra=ra):
            student = await self._get_one(
                select(students_table).where(students_table.c.ra == ra), options
            )
            if student is None:
                logger.debug(f"No student found with RA: {ra}")
            return student

    async def get_by_id(self, student_id: int, options: QueryOptions | None = None) -> Student | None:
        """
        Get a student by its numeric identifier.

        Returns:
            The Student if found, None otherwise
        """
        async with db_error_handler("Failed to get student by ID", student_id=student_id):
            student = await self._get_one(
                select(students_table).where(students_table.c.id == student_id), options
            )
            logger.debug(f"Retrieved student by ID {student_id}: {'found' if student else 'not found'}")
            return student

    async def get_by_email(self, email: str, options: QueryOptions | None = None) -> Student | None:
        """
        Get a student by email address (exact match, collation decides case).
        """
        async with db_error_handler("Failed to get student by email"):
            return await self._get_one(
                select(students_table).where(students_table.c.email == email), options
            )

    async def get_all(self, options: QueryOptions | None = None) -> list[Student]:
        """
        Return every student ordered by name (ascending). An empty table yields [].
        """
        async with db_error_handler("Failed to list students"):
            result = await self._execute(
                select(students_table).order_by(students_table.c.name.asc()), options
            )
            students = [_to_student(row) for row in result.rows]
            logger.debug(f"Listed {len(students)} students")
            return students

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def create(
        self,
        data: CreateStudentDTO | Mapping[str, Any],
        options: QueryOptions | None = None,
    ) -> Student:
        """
        Validate `data` and insert a new student.

        Both timestamps are set by the store (`now()`), and the row is returned
        as persisted (generated id and server timestamps included).

        Raises:
            ValidationError: if `data` is invalid; nothing is written.
            InternalServerError: if the insert fails or returns no row.
        """
        dto = validate_or_raise(CreateStudentDTO, data)

        async with db_error_handler("Failed to create student", ra=dto.ra):
            statement = (
                insert(students_table)
                .values(
                    ra=dto.ra,
                    name=dto.name,
                    email=dto.email,
                    createdAt=func.now(),
                    updatedAt=func.now(),
                )
                .returning(students_table)
            )
            row = (await self._execute(statement, options)).first()
            if row is None:
                raise InternalServerError("Failed to create student: no row returned by insert")

            student = _to_student(row)
            logger.info("repo.create.success", extra={"student_id": student.id, "ra": student.ra})
            return student

    async def update(
        self,
        student_id: int,
        data: UpdateStudentDTO | Mapping[str, Any],
        options: QueryOptions | None = None,
    ) -> Student | None:
        """
        Apply a partial patch to a student.

        Only the supplied fields are written, plus `updatedAt = now()`. An empty
        patch writes nothing and returns the current row; a failure of that read
        is reported with the update prefix too.

        Returns:
            The updated Student, or None if no row has `student_id`.

        Raises:
            ValidationError: if `data` is invalid; nothing is written.
            InternalServerError: if the update fails.
        """
        patch = validate_or_raise(UpdateStudentDTO, data)
        changes = patch.changes()

        async with db_error_handler("Failed to update student", student_id=student_id):
            if not changes:
                logger.debug(f"Empty patch for student {student_id}; returning current state")
                return await self._get_one(
                    select(students_table).where(students_table.c.id == student_id), options
                )

            # Build the SET clause from the present fields only; values stay bound parameters
            values: dict[str, Any] = {}
            for column in UPDATABLE_COLUMNS:
                if column in changes:
                    values[column] = changes[column]
            values["updatedAt"] = func.now()

            statement = (
                update(students_table)
                .where(students_table.c.id == student_id)
                .values(**values)
                .returning(students_table)
            )
            row = (await self._execute(statement, options)).first()
            if row is None:
                logger.debug(f"No student to update with ID: {student_id}")
                return None

            logger.info(
                "repo.update.success",
                extra={"student_id": student_id, "updated_fields": sorted(changes)},
            )
            return _to_student(row)

    async def delete(self, student_id: int, options: QueryOptions | None = None) -> bool:
        """
        Delete a student by ID.

        Returns:
            True if a row was deleted, False if none had `student_id`.
        """
        async with db_error_handler("Failed to delete student", student_id=student_id):
            result = await self._execute(
                delete(students_table).where(students_table.c.id == student_id), options
            )
            deleted = (result.rowcount or 0) > 0
            logger.info("repo.delete", extra={"student_id": student_id, "deleted": deleted})
            return deleted
