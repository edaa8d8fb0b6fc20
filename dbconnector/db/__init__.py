"""Database connectivity and query execution."""

from dbconnector.db.base import BaseAdapter, parse_dsn
from dbconnector.db.connection import AdapterFactory, resolve_adapter
from dbconnector.db.connector import DBConnector
from dbconnector.db.adapters import (
    PostgreSQLAdapter,
    MySQLAdapter,
)

__all__ = [
    # Base classes
    "BaseAdapter",
    "parse_dsn",
    # Connection management
    "AdapterFactory",
    "resolve_adapter",
    "DBConnector",
    # Database adapters
    "PostgreSQLAdapter",
    "MySQLAdapter",
]
