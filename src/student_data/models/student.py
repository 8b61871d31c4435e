from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from student_data.database.base import Base


class StudentRecord(Base):
    """
    SQLAlchemy mapping of the `Students` table.

    Column names follow the existing store schema (camelCase timestamps);
    the Python attributes use snake_case.
    """
    __tablename__ = "Students"

    # Identity primary key generated by the store
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Registration code (unique)
    ra: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Email address (unique)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        server_default=func.now(),
        nullable=False,
    )

    # Refreshed explicitly by every UPDATE issued from the repository
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StudentRecord(id={self.id!r}, ra={self.ra!r}, email={self.email!r})>"


# The Core table, used by the repository to build statements.
students_table = StudentRecord.__table__
