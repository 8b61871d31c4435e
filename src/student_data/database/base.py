"""
This Base class is used as the declarative base for the ORM models.
The Students table itself is owned by the store (migrations live elsewhere);
the mapping here describes its shape so statements can be built against it and
so tests can create the schema with `Base.metadata.create_all`.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}
