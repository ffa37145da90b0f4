from typing import Optional

from pydantic import Field, field_validator

from fluentsql.constants import DEFAULT_ESCAPE_DELIMITER
from fluentsql.settings.base import FluentSQLBaseSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BuilderSettings(FluentSQLBaseSettings):
    """Process-wide defaults for query builders and tables.

    Environment Variables:
        FLUENTSQL_DIALECT: Dialect used when the factory gets no explicit one
        FLUENTSQL_ESCAPE_DELIMITER: Marker wrapped around escapable literals
        FLUENTSQL_DEFAULT_CHARSET: CHARACTER SET for new tables
        FLUENTSQL_DEFAULT_COLLATION: COLLATE for new tables
        FLUENTSQL_DEFAULT_ENGINE: ENGINE for new tables
        FLUENTSQL_LOG_LEVEL: Level used by ``setup_logging()``
        FLUENTSQL_TRACE_RENDERING: Attach span attributes when rendering
    """

    dialect: str = Field(
        default="mysql",
        description="Dialect identifier used by the query builder factory"
    )
    escape_delimiter: str = Field(
        default=DEFAULT_ESCAPE_DELIMITER,
        min_length=1,
        description="Marker wrapped around string literals so the driver can escape them"
    )

    default_charset: str = Field(
        default="utf8",
        description="Character set used by tables that don't set one"
    )
    default_collation: str = Field(
        default="utf8_unicode_ci",
        description="Collation used by tables that don't set one"
    )
    default_engine: str = Field(
        default="InnoDB",
        description="Storage engine used by tables that don't set one"
    )

    log_level: str = Field(
        default="INFO",
        description="Base log level for setup_logging()"
    )
    trace_rendering: bool = Field(
        default=True,
        description="Whether build() spans carry statement attributes"
    )

    @field_validator("dialect")
    @classmethod
    def _normalize_dialect(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


_settings: Optional[BuilderSettings] = None


def get_settings(force_reload: bool = False) -> BuilderSettings:
    """Get the singleton settings instance.

    Args:
        force_reload: If True, creates a new instance even if one already
                     exists. Useful for testing or when environment
                     variables have changed.

    Returns:
        BuilderSettings: The singleton settings instance

    Example:
        ```python
        settings = get_settings()
        print(settings.default_engine)
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = BuilderSettings()

    return _settings


def reload_settings() -> BuilderSettings:
    """Force reload of settings.

    Returns:
        BuilderSettings: Fresh settings instance
    """
    return get_settings(force_reload=True)
