"""Configuration management for DBConnector."""

from dbconnector.config.models import (
    DatabaseType,
    Role,
    ROLE_ENV_VARS,
    Credentials,
    ConnectionDescriptor,
    ServerSettings,
    EnvironmentSettings,
)
from dbconnector.config.resolver import (
    parse_role,
    parse_database_type,
    resolve_credentials,
)

__all__ = [
    # Models
    "DatabaseType",
    "Role",
    "ROLE_ENV_VARS",
    "Credentials",
    "ConnectionDescriptor",
    "ServerSettings",
    "EnvironmentSettings",
    # Resolution
    "parse_role",
    "parse_database_type",
    "resolve_credentials",
]
