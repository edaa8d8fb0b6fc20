"""DBConnector: role-based database connections for PostgreSQL and MySQL.

DBConnector provides:
- Credential selection by access role from environment variables
- PDO-style connection strings for PostgreSQL and MySQL
- A single SQLAlchemy connection per instance with fixed session attributes
- Row, column and row-count query helpers plus transaction passthroughs
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core exports
from dbconnector.exceptions import (
    DBConnectorError,
    ConfigurationError,
    DatabaseError,
    UnsupportedRoleError,
    IncompleteCredentialsError,
    UnsupportedEngineError,
    ConnectionFailedError,
)
from dbconnector.config.models import DatabaseType, Role
from dbconnector.db.connector import DBConnector

__all__ = [
    "__version__",
    "DBConnector",
    "DatabaseType",
    "Role",
    "DBConnectorError",
    "ConfigurationError",
    "DatabaseError",
    "UnsupportedRoleError",
    "IncompleteCredentialsError",
    "UnsupportedEngineError",
    "ConnectionFailedError",
]
