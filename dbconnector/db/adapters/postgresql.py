"""PostgreSQL database adapter."""

from dbconnector.db.base import BaseAdapter


class PostgreSQLAdapter(BaseAdapter):
    """PostgreSQL database adapter."""

    url_drivername = "postgresql+psycopg2"

    def get_driver_name(self) -> str:
        """Get the driver name for PostgreSQL."""
        return "psycopg2"

    def build_connection_string(self) -> str:
        """Build PostgreSQL connection string.
        
        Returns:
            ``pgsql:host=<DB_HOST>;port=<DB_PORT_PGSQL>;dbname=<database>``
        """
        return (
            f"pgsql:host={self.settings.db_host};"
            f"port={self.settings.db_port_pgsql};"
            f"dbname={self.descriptor.database}"
        )
