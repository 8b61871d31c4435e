from .config_validators import to_uppercase, to_lowercase, empty_to_none
from .schema_validators import validate_or_raise, format_validation_errors

__all__ = [
    "to_uppercase",
    "to_lowercase",
    "empty_to_none",
    "validate_or_raise",
    "format_validation_errors",
]
