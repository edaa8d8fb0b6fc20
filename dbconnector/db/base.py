"""Base database adapter and connection opening."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.pool import NullPool

from dbconnector.config.models import ConnectionDescriptor, Credentials, ServerSettings
from dbconnector.exceptions import ConnectionFailedError

logger = logging.getLogger(__name__)


def parse_dsn(dsn: str) -> Tuple[str, Dict[str, str]]:
    """Split a PDO-style DSN into its prefix and key/value pairs.

    ``"mysql:host=h;port=3306;dbname=db"`` becomes
    ``("mysql", {"host": "h", "port": "3306", "dbname": "db"})``.
    """
    prefix, _, body = dsn.partition(":")
    pairs: Dict[str, str] = {}
    for part in body.split(";"):
        if not part:
            continue
        key, _, value = part.partition("=")
        pairs[key.strip()] = value.strip()
    return prefix, pairs


class BaseAdapter(ABC):
    """Base class for database adapters.

    An adapter knows how to spell the connection string for one engine and
    how to open a SQLAlchemy connection from it.
    """

    #: SQLAlchemy dialect+driver used to open the connection.
    url_drivername: str = ""

    def __init__(
        self,
        descriptor: ConnectionDescriptor,
        credentials: Credentials,
        settings: Optional[ServerSettings] = None,
    ) -> None:
        """Initialize database adapter.
        
        Args:
            descriptor: Engine, database name and role.
            credentials: Account used for the connection.
            settings: Server host and ports. Read from the environment if None.
        """
        self.descriptor = descriptor
        self.credentials = credentials
        self.settings = settings or ServerSettings()

    @abstractmethod
    def build_connection_string(self) -> str:
        """Build the PDO-style connection string (DSN).

        Returns:
            Connection string without credentials.
        """
        pass

    @abstractmethod
    def get_driver_name(self) -> str:
        """Get the DBAPI driver name for this adapter.
        
        Returns:
            Driver name string.
        """
        pass

    def build_url(self, dsn: Optional[str] = None) -> URL:
        """Translate the DSN into a SQLAlchemy URL carrying the credentials.

        ``host``, ``port`` and ``dbname`` map onto the URL fields; any other
        DSN key (such as ``charset``) becomes a query option.
        """
        _, pairs = parse_dsn(dsn or self.build_connection_string())
        host = pairs.pop("host", "")
        port = pairs.pop("port", "")
        database = pairs.pop("dbname", "")

        return URL.create(
            self.url_drivername,
            username=self.credentials.username,
            password=self.credentials.password,
            host=host or None,
            port=int(port) if port else None,
            database=database or None,
            query=pairs,
        )

    def _get_engine_options(self) -> Dict[str, Any]:
        """Get database-specific engine options.
        
        Returns:
            Dictionary of engine options.
        """
        return {}

    def connect(self) -> Tuple[Engine, Connection]:
        """Open the one connection this adapter describes.

        The engine uses ``NullPool`` so that closing the connection closes the
        underlying DBAPI connection.

        Returns:
            The engine and the open connection.

        Raises:
            ConnectionFailedError: If the URL is invalid or connecting fails.
        """
        dsn = self.build_connection_string()
        logger.debug("Connecting with DSN %s", dsn)

        engine: Optional[Engine] = None
        try:
            engine = create_engine(
                self.build_url(dsn),
                poolclass=NullPool,
                **self._get_engine_options(),
            )
            connection = engine.connect()
        except Exception as e:
            if engine is not None:
                engine.dispose()
            raise ConnectionFailedError(
                e,
                database_type=self.descriptor.db_type.value,
                connection_string=dsn,
            ) from e

        logger.info(
            "Connected to %s database '%s' as role %s",
            self.descriptor.db_type.value,
            self.descriptor.database,
            self.descriptor.role.value,
        )
        return engine, connection
