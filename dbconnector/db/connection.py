"""Adapter factory and connection resolution."""

from typing import Any, Dict, Optional, Type

from dbconnector.config.models import (
    ConnectionDescriptor,
    Credentials,
    DatabaseType,
    ServerSettings,
)
from dbconnector.config.resolver import (
    parse_database_type,
    parse_role,
    resolve_credentials,
)
from dbconnector.db.adapters.mysql import MySQLAdapter
from dbconnector.db.adapters.postgresql import PostgreSQLAdapter
from dbconnector.db.base import BaseAdapter
from dbconnector.exceptions import UnsupportedEngineError


class AdapterFactory:
    """Factory for creating database adapters."""
    
    _adapters: Dict[DatabaseType, Type[BaseAdapter]] = {
        DatabaseType.PGSQL: PostgreSQLAdapter,
        DatabaseType.MYSQL: MySQLAdapter,
    }
    
    @classmethod
    def create_adapter(
        cls,
        descriptor: ConnectionDescriptor,
        credentials: Credentials,
        settings: Optional[ServerSettings] = None,
    ) -> BaseAdapter:
        """Create a database adapter for the descriptor's engine.
        
        Args:
            descriptor: Engine, database name and role.
            credentials: Account used for the connection.
            settings: Server host and ports.
            
        Returns:
            Database adapter instance.
            
        Raises:
            UnsupportedEngineError: If the engine has no adapter.
        """
        adapter_class = cls._adapters.get(descriptor.db_type)
        if not adapter_class:
            raise UnsupportedEngineError(descriptor.db_type)
        
        return adapter_class(descriptor, credentials, settings)
    
    @classmethod
    def get_supported_types(cls) -> list[DatabaseType]:
        """Get list of supported database types."""
        return list(cls._adapters.keys())


def resolve_adapter(
    driver: Any,
    database: str,
    role: Any,
    settings: Optional[ServerSettings] = None,
) -> BaseAdapter:
    """Validate the inputs and build the adapter, without connecting.

    Checks run in a fixed order: role, then credentials, then engine. The
    server settings are read last.

    Args:
        driver: ``'pgsql'`` or ``'mysql'`` (any case).
        database: Database name.
        role: ``'readonly'``, ``'insertupdate'``, ``'delete'`` or ``'auth'``.
        settings: Server host and ports. Read from the environment if None.

    Raises:
        UnsupportedRoleError: If the role is unknown.
        IncompleteCredentialsError: If the role's credentials are not set.
        UnsupportedEngineError: If the engine is unknown.
    """
    parsed_role = parse_role(role)
    credentials = resolve_credentials(parsed_role)
    db_type = parse_database_type(driver)

    descriptor = ConnectionDescriptor(db_type=db_type, database=database, role=parsed_role)
    return AdapterFactory.create_adapter(descriptor, credentials, settings or ServerSettings())
