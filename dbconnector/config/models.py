"""Models for DBConnector configuration."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """Supported database engines."""
    PGSQL = "pgsql"
    MYSQL = "mysql"


class Role(str, Enum):
    """Access roles, each with its own database account."""
    READONLY = "readonly"
    INSERTUPDATE = "insertupdate"
    DELETE = "delete"
    AUTH = "auth"


# Environment variable names holding (username, password) per role
ROLE_ENV_VARS: Dict[Role, Tuple[str, str]] = {
    Role.READONLY: ("DB_READONLY_USER", "DB_READONLY_PASS"),
    Role.INSERTUPDATE: ("DB_UPDATE_USER", "DB_UPDATE_PASS"),
    Role.DELETE: ("DB_DELETE_USER", "DB_DELETE_PASS"),
    Role.AUTH: ("DB_AUTH_USER", "DB_AUTH_PASS"),
}


@dataclass(frozen=True)
class Credentials:
    """Username and password of a database account."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Engine, database name and role of a connection."""

    db_type: DatabaseType
    database: str
    role: Role


class ServerSettings(BaseSettings):
    """Server location shared by every role.

    Values are substituted verbatim into the connection string, so an unset
    variable leaves its slot empty.
    """

    model_config = SettingsConfigDict(case_sensitive=False)

    db_host: str = Field(default="")
    db_port_pgsql: str = Field(default="")
    db_port_mysql: str = Field(default="")


class EnvironmentSettings(BaseSettings):
    """Environment-specific settings."""

    model_config = SettingsConfigDict(env_prefix="DBCONNECTOR_", case_sensitive=False)

    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)
