"""
Database configuration schema.

`DatabaseConfig` is validated once, when `Database` is constructed. Defaults for
the nested options are applied here so the rest of the code always sees a
normalized configuration.

Both snake_case and the camelCase names used by SQL Server tooling
(`trustServerCertificate`, `requestTimeout`, ...) are accepted.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

DEFAULT_DRIVER = "mssql+aioodbc"
DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"


class DatabaseOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    encrypt: StrictBool = True
    trust_server_certificate: StrictBool = Field(default=False, alias="trustServerCertificate")
    enable_arith_abort: StrictBool = Field(default=True, alias="enableArithAbort")

    # milliseconds
    request_timeout: StrictInt = Field(default=30_000, gt=0, alias="requestTimeout")
    connection_timeout: StrictInt = Field(default=15_000, gt=0, alias="connectionTimeout")

    # Name of the ODBC driver used by the mssql dialects
    odbc_driver: StrictStr = Field(default=DEFAULT_ODBC_DRIVER, min_length=1, alias="odbcDriver")


class DatabaseConfig(BaseModel):
    """
    Connection settings for the store.

    `driver` is a SQLAlchemy async drivername. SQL Server (`mssql+aioodbc`) is
    the default; `sqlite+aiosqlite` is used for local runs and tests, in which
    case `database` is the file path and the remaining fields are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    driver: StrictStr = Field(default=DEFAULT_DRIVER, min_length=1)
    server: StrictStr = Field(min_length=1)
    database: StrictStr = Field(min_length=1)
    user: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1, repr=False)
    port: StrictInt | None = Field(default=None, gt=0, le=65535)
    options: DatabaseOptions = Field(default_factory=DatabaseOptions)

    @field_validator("options", mode="before")
    @classmethod
    def default_options(cls, v):
        # An explicit None means "use the defaults"
        return {} if v is None else v

    @property
    def backend(self) -> str:
        """Dialect part of the drivername, e.g. 'mssql' or 'sqlite'."""
        return self.driver.split("+", 1)[0]
