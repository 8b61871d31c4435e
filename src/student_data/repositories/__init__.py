"""
Repository layer.

Usage:
    from student_data.repositories import StudentRepository
"""

from .base_repository import BaseRepository, DatabaseContext
from .student_repository import StudentRepository

__all__ = [
    "BaseRepository",
    "DatabaseContext",
    "StudentRepository",
]
