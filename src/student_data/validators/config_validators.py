"""Normalizers applied to raw environment values before pydantic checks them."""


def to_uppercase(value):
    """`debug ` -> `DEBUG`; non-strings are returned untouched."""
    return value.strip().upper() if isinstance(value, str) else value


def to_lowercase(value):
    return value.strip().lower() if isinstance(value, str) else value


def empty_to_none(value):
    """
    Treat blank strings coming from the environment (e.g. `DB_PORT=`) as unset.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value
