"""
Core pytest configuration for the entire test suite.

This module only installs logging for the session and registers the shared
fixtures. Domain-specific fixtures live in:
- tests/test_fixtures/database_fixtures.py
- tests/test_fixtures/repository_fixtures.py

Tests run against a throwaway SQLite file per test (sqlite+aiosqlite) under
pytest's tmp_path, so no SQL Server instance is needed.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the student_data imports so metadata registration and
# engine creation stay quiet during collection.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "sqlalchemy.pool",
    "aiosqlite",
    "asyncio",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest

from student_data.core.logging.builder import setup_logging

from .test_fixtures.logging_fixtures import TestLoggingSettings


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the package logging configuration once for the whole session.

    dictConfig drops pytest's capture handlers from the root logger, so they
    are re-attached afterwards; caplog-based assertions rely on them.
    """
    setup_logging(TestLoggingSettings())

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    for attr in ("caplog_handler", "report_handler"):
        handler = getattr(caplog_plugin, attr, None)
        if handler is not None:
            logging.getLogger().addHandler(handler)

    yield


# Database and repository fixtures
from .test_fixtures.database_fixtures import (  # noqa: E402
    database_file,
    database_config,
    database,
)
from .test_fixtures.repository_fixtures import (  # noqa: E402
    student_repository,
    sample_student_data,
    create_student,
    created_student,
    multiple_students,
)
