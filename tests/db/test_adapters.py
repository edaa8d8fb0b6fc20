"""Tests for connection strings, URLs and the adapter factory."""

import pytest
from sqlalchemy.pool import NullPool

from dbconnector.config.models import (
    ConnectionDescriptor,
    Credentials,
    DatabaseType,
    Role,
    ServerSettings,
)
from dbconnector.db.adapters import MySQLAdapter, PostgreSQLAdapter
from dbconnector.db.base import parse_dsn
from dbconnector.db.connection import AdapterFactory, resolve_adapter
from dbconnector.exceptions import (
    ConnectionFailedError,
    IncompleteCredentialsError,
    UnsupportedEngineError,
    UnsupportedRoleError,
)

SETTINGS = ServerSettings(db_host="h", db_port_pgsql="5432", db_port_mysql="3306")
CREDENTIALS = Credentials("reader", "p@ss;word")


def make_adapter(db_type: DatabaseType, settings: ServerSettings = SETTINGS):
    descriptor = ConnectionDescriptor(db_type=db_type, database="db", role=Role.READONLY)
    return AdapterFactory.create_adapter(descriptor, CREDENTIALS, settings)


class TestConnectionStrings:
    """Test PDO-style connection strings."""

    def test_postgresql(self) -> None:
        """pgsql uses the PostgreSQL adapter and the exact DSN."""
        adapter = make_adapter(DatabaseType.PGSQL)

        assert isinstance(adapter, PostgreSQLAdapter)
        assert adapter.build_connection_string() == "pgsql:host=h;port=5432;dbname=db"

    def test_mysql(self) -> None:
        """mysql uses the MySQL adapter and the exact DSN with utf8mb4."""
        adapter = make_adapter(DatabaseType.MYSQL)

        assert isinstance(adapter, MySQLAdapter)
        assert adapter.build_connection_string() == "mysql:host=h;port=3306;dbname=db;charset=utf8mb4"

    def test_unset_server_values_stay_empty(self) -> None:
        """Unset host and port are substituted as empty strings."""
        adapter = make_adapter(DatabaseType.PGSQL, ServerSettings(db_host="", db_port_pgsql=""))

        assert adapter.build_connection_string() == "pgsql:host=;port=;dbname=db"

    def test_connection_string_has_no_credentials(self) -> None:
        """Neither username nor password appears in the DSN."""
        for db_type in DatabaseType:
            dsn = make_adapter(db_type).build_connection_string()
            assert "reader" not in dsn
            assert "p@ss" not in dsn

    def test_driver_names(self) -> None:
        """Each adapter names its DBAPI driver."""
        assert make_adapter(DatabaseType.PGSQL).get_driver_name() == "psycopg2"
        assert make_adapter(DatabaseType.MYSQL).get_driver_name() == "pymysql"


class TestParseDsn:
    """Test DSN splitting."""

    def test_splits_prefix_and_pairs(self) -> None:
        """The engine prefix and key=value pairs are separated."""
        prefix, pairs = parse_dsn("mysql:host=h;port=3306;dbname=db;charset=utf8mb4")

        assert prefix == "mysql"
        assert pairs == {"host": "h", "port": "3306", "dbname": "db", "charset": "utf8mb4"}

    def test_keeps_empty_values(self) -> None:
        """Empty values survive parsing."""
        assert parse_dsn("pgsql:host=;port=;dbname=db") == (
            "pgsql", {"host": "", "port": "", "dbname": "db"}
        )


class TestBuildUrl:
    """Test translation of connection strings into SQLAlchemy URLs."""

    def test_postgresql_url(self) -> None:
        """Every DSN field and the credentials land in the URL."""
        url = make_adapter(DatabaseType.PGSQL).build_url()

        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "h"
        assert url.port == 5432
        assert url.database == "db"
        assert url.username == "reader"
        assert url.password == "p@ss;word"
        assert dict(url.query) == {}

    def test_mysql_url_carries_charset(self) -> None:
        """Keys other than host, port and dbname become URL query options."""
        url = make_adapter(DatabaseType.MYSQL).build_url()

        assert url.drivername == "mysql+pymysql"
        assert url.port == 3306
        assert dict(url.query) == {"charset": "utf8mb4"}

    def test_empty_host_and_port(self) -> None:
        """Empty host and port leave the URL fields unset."""
        url = make_adapter(DatabaseType.PGSQL, ServerSettings(db_host="", db_port_pgsql="")).build_url()

        assert url.host is None
        assert url.port is None

    def test_password_hidden_in_rendered_url(self) -> None:
        """Rendering the URL masks the password."""
        rendered = str(make_adapter(DatabaseType.PGSQL).build_url())

        assert "p@ss;word" not in rendered


class TestConnect:
    """Test opening connections through an adapter."""

    def test_engine_options(self, engine_calls) -> None:
        """Engines are created once, without pooling."""
        engine, connection = make_adapter(DatabaseType.PGSQL).connect()
        connection.close()
        engine.dispose()

        assert len(engine_calls) == 1
        assert engine_calls[0]["url"].drivername == "postgresql+psycopg2"
        assert engine_calls[0]["kwargs"]["poolclass"] is NullPool
        assert "connect_args" not in engine_calls[0]["kwargs"]

    def test_mysql_reports_changed_rows(self, engine_calls) -> None:
        """MySQL connections clear FOUND_ROWS."""
        engine, connection = make_adapter(DatabaseType.MYSQL).connect()
        connection.close()
        engine.dispose()

        assert engine_calls[0]["kwargs"]["connect_args"] == {"client_flag": 0}

    def test_invalid_port_wrapped(self, engine_calls) -> None:
        """A non-numeric port fails as ConnectionFailedError before create_engine."""
        adapter = make_adapter(DatabaseType.PGSQL, ServerSettings(db_host="h", db_port_pgsql="abc"))

        with pytest.raises(ConnectionFailedError) as exc_info:
            adapter.connect()

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.connection_string == "pgsql:host=h;port=abc;dbname=db"
        assert exc_info.value.database_type == "pgsql"
        assert engine_calls == []


class TestResolveAdapter:
    """Test input validation order."""

    def test_builds_adapter(self, db_env) -> None:
        """A valid triple yields an adapter with descriptor and credentials."""
        adapter = resolve_adapter("MYSQL", "shop", "insertupdate")

        assert adapter.descriptor == ConnectionDescriptor(DatabaseType.MYSQL, "shop", Role.INSERTUPDATE)
        assert adapter.credentials.username == "insertupdate_user"
        assert adapter.build_connection_string() == "mysql:host=h;port=3306;dbname=shop;charset=utf8mb4"

    def test_role_checked_before_environment(self, clean_env, monkeypatch) -> None:
        """An unknown role fails before credentials are read."""
        def fail(*args, **kwargs):
            raise AssertionError("credentials must not be read")

        monkeypatch.setattr("dbconnector.db.connection.resolve_credentials", fail)

        with pytest.raises(UnsupportedRoleError):
            resolve_adapter("nosuchdb", "db", "superuser")

    def test_credentials_checked_before_engine(self, clean_env) -> None:
        """Missing credentials win over an unknown engine."""
        with pytest.raises(IncompleteCredentialsError):
            resolve_adapter("nosuchdb", "db", "readonly")

    def test_engine_checked_after_credentials(self, db_env) -> None:
        """An unknown engine fails once credentials are present."""
        with pytest.raises(UnsupportedEngineError):
            resolve_adapter("oracle", "db", "readonly")

    def test_supported_types(self) -> None:
        """Exactly pgsql and mysql have adapters."""
        assert set(AdapterFactory.get_supported_types()) == {DatabaseType.PGSQL, DatabaseType.MYSQL}
