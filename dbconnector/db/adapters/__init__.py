"""Database adapters for different database types."""

from dbconnector.db.adapters.postgresql import PostgreSQLAdapter
from dbconnector.db.adapters.mysql import MySQLAdapter

__all__ = [
    "PostgreSQLAdapter",
    "MySQLAdapter",
]
