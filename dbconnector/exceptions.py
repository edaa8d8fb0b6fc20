"""Core exceptions for DBConnector."""

from typing import Any, Dict, Optional


class DBConnectorError(Exception):
    """Base exception for all DBConnector errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DBConnectorError):
    """Raised when the connection cannot be configured from its inputs."""
    pass


class UnsupportedRoleError(ConfigurationError, ValueError):
    """Raised when the access role is not one of the known roles."""

    def __init__(self, role: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Unsupported role: {role} ('readonly', 'insertupdate', 'delete' or 'auth').",
            details,
        )
        self.role = role


class IncompleteCredentialsError(ConfigurationError):
    """Raised when the username or password for a role is missing."""

    def __init__(self, role: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"DB credentials for role '{role}' are not completely set "
            "(environment variables missing?).",
            details,
        )
        self.role = role


class UnsupportedEngineError(ConfigurationError, ValueError):
    """Raised when the database engine is not one of the known engines."""

    def __init__(self, driver: Any, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Unsupported driver: {driver} ('pgsql' or 'mysql').",
            details,
        )
        self.driver = driver


class DatabaseError(DBConnectorError):
    """Raised when there's an error connecting to a database."""
    
    def __init__(
        self, 
        message: str, 
        database_type: Optional[str] = None,
        connection_string: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.database_type = database_type
        self.connection_string = connection_string


class ConnectionFailedError(DatabaseError):
    """Raised when opening the connection fails.

    The driver or SQLAlchemy error is chained as ``__cause__`` and kept on
    ``cause``.
    """

    def __init__(
        self,
        cause: BaseException,
        database_type: Optional[str] = None,
        connection_string: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            f"Database connection failed: {cause}",
            database_type=database_type,
            connection_string=connection_string,
            details=details,
        )
        self.cause = cause
