"""
Pydantic schemas for the Student entity.

- Student: a row as persisted by the store (validated on every read).
- CreateStudentDTO: payload accepted by StudentRepository.create().
- UpdateStudentDTO: partial patch accepted by StudentRepository.update().
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class Student(BaseModel):
    """
    A persisted student.

    The store names its timestamp columns `createdAt` / `updatedAt`; they are
    accepted as aliases so a row mapping can be validated directly.
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    ra: str = Field(min_length=1)
    name: str = Field(min_length=1)
    email: EmailStr
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class CreateStudentDTO(BaseModel):
    ra: str = Field(min_length=6, description="Registration code, at least 6 characters")
    name: str = Field(min_length=3, description="Full name, at least 3 characters")
    email: EmailStr


class UpdateStudentDTO(BaseModel):
    """
    Partial patch. Only the fields that are present are written; an empty
    patch is valid. Fields may be omitted but not set to null.
    """

    name: str | None = Field(default=None, min_length=3)
    email: EmailStr | None = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v):
        # defaults are not validated, so this only sees values the caller sent
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    def changes(self) -> dict[str, str]:
        """Return the supplied fields as a column -> value mapping."""
        return self.model_dump(exclude_unset=True)
