# student_data/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py      # AppError, ValidationError, InternalServerError
# │   └── mapper.py    # turn driver / connection errors into InternalServerError
from .base import AppError, ValidationError, InternalServerError
from .mapper import db_error_handler, describe_error, to_internal_error

__all__ = [
    "AppError",
    "ValidationError",
    "InternalServerError",
    "db_error_handler",
    "describe_error",
    "to_internal_error",
]
