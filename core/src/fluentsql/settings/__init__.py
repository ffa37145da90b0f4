"""Settings module for fluentsql.

Configuration is built on Pydantic Settings. Values come from, in order of
precedence:

    1. Environment variables prefixed with ``FLUENTSQL_``
    2. A ``.env`` file in the working directory
    3. Field defaults

Builders and tables read their defaults (escape delimiter, charset,
collation, engine) when they are constructed, so explicit constructor
arguments always win over settings.
"""

from fluentsql.settings.base import FluentSQLBaseSettings
from fluentsql.settings.main import BuilderSettings, get_settings, reload_settings

__all__ = [
    "FluentSQLBaseSettings",
    "BuilderSettings",
    "get_settings",
    "reload_settings",
]
