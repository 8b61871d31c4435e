from .database import DatabaseConfig, DatabaseOptions
from .student import Student, CreateStudentDTO, UpdateStudentDTO

__all__ = [
    "DatabaseConfig",
    "DatabaseOptions",
    "Student",
    "CreateStudentDTO",
    "UpdateStudentDTO",
]
