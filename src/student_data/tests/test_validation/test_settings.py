from pathlib import Path

import pytest

from student_data.config.settings import Settings
from student_data.exceptions import ValidationError

REQUIRED = {
    "DB_SERVER": "db.internal",
    "DB_DATABASE": "School",
    "DB_USER": "app",
    "DB_PASSWORD": "secret",
}


def make_settings(**overrides) -> Settings:
    # _env_file=None keeps a developer's .env out of the tests
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


class TestSettings:
    def test_defaults(self):
        settings = make_settings()

        assert settings.ENV == "development"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "json"
        assert settings.LOG_DIR == Path("logs")
        assert settings.DB_PORT is None
        assert settings.ENABLE_SQL_LOGGING is False

    def test_log_values_are_normalized(self):
        settings = make_settings(LOG_LEVEL="debug", LOG_FORMAT="TEXT")

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_FORMAT == "text"

    def test_reads_from_environment(self, monkeypatch):
        for key, value in REQUIRED.items():
            monkeypatch.setenv(key, value)
        monkeypatch.setenv("DB_PORT", "")
        monkeypatch.setenv("DB_REQUEST_TIMEOUT", "5000")
        monkeypatch.setenv("DB_TRUST_SERVER_CERTIFICATE", "true")

        settings = Settings(_env_file=None)

        assert settings.DB_SERVER == "db.internal"
        assert settings.DB_PORT is None
        assert settings.DB_REQUEST_TIMEOUT == 5000
        assert settings.DB_TRUST_SERVER_CERTIFICATE is True

    def test_database_config(self):
        config = make_settings(DB_PORT=1433, DB_REQUEST_TIMEOUT=5_000, DB_ENCRYPT=False).database_config()

        assert config.server == "db.internal"
        assert config.port == 1433
        assert config.options.request_timeout == 5_000
        assert config.options.encrypt is False
        assert config.options.connection_timeout == 15_000

    def test_database_config_rejects_empty_server(self):
        with pytest.raises(ValidationError) as exc_info:
            make_settings(DB_SERVER="").database_config()

        assert exc_info.value.fields == ["server"]
        assert exc_info.value.message == "Invalid database configuration"
