from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache

from ..schemas.database import DEFAULT_DRIVER, DEFAULT_ODBC_DRIVER, DatabaseConfig
from ..validators.config_validators import to_uppercase, to_lowercase, empty_to_none
from ..validators.schema_validators import validate_or_raise


class Settings(BaseSettings):
    """
    Settings loaded from the environment (and an optional .env file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    DB_DRIVER: str = DEFAULT_DRIVER
    DB_SERVER: str
    DB_DATABASE: str
    DB_USER: str
    DB_PASSWORD: str
    DB_PORT: int | None = None

    # Database options (timeouts in milliseconds)
    DB_ENCRYPT: bool = True
    DB_TRUST_SERVER_CERTIFICATE: bool = False
    DB_ENABLE_ARITH_ABORT: bool = True
    DB_REQUEST_TIMEOUT: int = 30_000
    DB_CONNECTION_TIMEOUT: int = 15_000
    DB_ODBC_DRIVER: str = DEFAULT_ODBC_DRIVER

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    def database_config(self) -> DatabaseConfig:
        """
        Build the validated DatabaseConfig used to construct `Database`.

        Raises:
            ValidationError: if the environment holds an unusable value
                (e.g. an empty DB_SERVER).
        """
        return validate_or_raise(
            DatabaseConfig,
            {
                "driver": self.DB_DRIVER,
                "server": self.DB_SERVER,
                "database": self.DB_DATABASE,
                "user": self.DB_USER,
                "password": self.DB_PASSWORD,
                "port": self.DB_PORT,
                "options": {
                    "encrypt": self.DB_ENCRYPT,
                    "trust_server_certificate": self.DB_TRUST_SERVER_CERTIFICATE,
                    "enable_arith_abort": self.DB_ENABLE_ARITH_ABORT,
                    "request_timeout": self.DB_REQUEST_TIMEOUT,
                    "connection_timeout": self.DB_CONNECTION_TIMEOUT,
                    "odbc_driver": self.DB_ODBC_DRIVER,
                },
            },
            message="Invalid database configuration",
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check, so `LOG_LEVEL=debug` works.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("DB_PORT", mode="before")
    @classmethod
    def blank_port_is_unset(cls, v):
        return empty_to_none(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
