"""
student_data: async data-access layer for Student records.

    from student_data import Database, QueryOptions

    async with Database(config) as db:
        student = await db.students.create({"ra": "123456", "name": "Ana", "email": "ana@example.com"})
"""

# database first: it wires the repositories into the manager
from .database import Database, QueryOptions, QueryResult, Request, Transaction
from .exceptions import AppError, InternalServerError, ValidationError
from .repositories import StudentRepository
from .schemas import CreateStudentDTO, DatabaseConfig, DatabaseOptions, Student, UpdateStudentDTO

__all__ = [
    "Database",
    "QueryOptions",
    "QueryResult",
    "Request",
    "Transaction",
    "AppError",
    "InternalServerError",
    "ValidationError",
    "StudentRepository",
    "CreateStudentDTO",
    "DatabaseConfig",
    "DatabaseOptions",
    "Student",
    "UpdateStudentDTO",
]
