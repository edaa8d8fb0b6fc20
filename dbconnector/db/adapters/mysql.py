"""MySQL database adapter."""

from typing import Any, Dict

from dbconnector.db.base import BaseAdapter


class MySQLAdapter(BaseAdapter):
    """MySQL database adapter."""

    url_drivername = "mysql+pymysql"

    def get_driver_name(self) -> str:
        """Get the driver name for MySQL."""
        return "pymysql"

    def build_connection_string(self) -> str:
        """Build MySQL connection string.

        The charset is always ``utf8mb4`` and is passed on to PyMySQL.
        
        Returns:
            ``mysql:host=<DB_HOST>;port=<DB_PORT_MYSQL>;dbname=<database>;charset=utf8mb4``
        """
        return (
            f"mysql:host={self.settings.db_host};"
            f"port={self.settings.db_port_mysql};"
            f"dbname={self.descriptor.database};"
            "charset=utf8mb4"
        )

    def _get_engine_options(self) -> Dict[str, Any]:
        """Get MySQL-specific engine options."""
        # client_flag=0 drops FOUND_ROWS, so rowcount counts changed rows
        return {
            'connect_args': {
                'client_flag': 0,
            }
        }
