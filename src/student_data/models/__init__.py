r"""
Centralized access to the database models.

Example:
    from student_data.models import StudentRecord, students_table
"""

from .student import StudentRecord, students_table

__all__ = [
    "StudentRecord",
    "students_table",
]
