from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "student-data"


def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    """
    Return the installed distribution name (used as the `service` field in logs).
    """
    try:
        return importlib_metadata.metadata(DISTRIBUTION_NAME)["Name"]
    except importlib_metadata.PackageNotFoundError:
        return default


def get_project_version(default: str = "unknown") -> str:
    """
    Return the installed distribution version, or `default` when running from a
    source checkout that was never installed.
    """
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return default


__all__ = [
    "get_project_name",
    "get_project_version",
]
