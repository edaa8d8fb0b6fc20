"""Role-based database connector."""

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult, RootTransaction

from dbconnector.config.models import ConnectionDescriptor, DatabaseType, Role
from dbconnector.db.connection import resolve_adapter

logger = logging.getLogger(__name__)

Params = Optional[Union[Sequence[Any], Mapping[str, Any]]]

# String literals, quoted identifiers and comments are skipped so a literal
# question mark inside them is left alone.
_POSITIONAL = re.compile(
    r"""'(?:[^'\\]|\\.|'')*'|"(?:[^"]|"")*"|`[^`]*`|--[^\n]*|/\*.*?\*/|\?""",
    re.DOTALL,
)


def bind_positional(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """Rewrite ``?`` placeholders into named binds for :func:`sqlalchemy.text`.

    Returns the rewritten statement and the bind mapping, ``{"_pos0": ...}``
    and so on in placeholder order.

    Raises:
        ValueError: If the number of placeholders and values differ.
    """
    names: List[str] = []

    def replace(match: "re.Match[str]") -> str:
        token = match.group(0)
        if token != "?":
            return token
        name = f"_pos{len(names)}"
        names.append(name)
        start = match.start()
        if start and (sql[start - 1].isalnum() or sql[start - 1] in "_:\\"):
            return f" :{name}"
        return f":{name}"

    statement = _POSITIONAL.sub(replace, sql)
    values = list(params)
    if len(names) != len(values):
        raise ValueError(
            f"Statement has {len(names)} positional placeholder(s) but {len(values)} value(s) were given"
        )
    return statement, dict(zip(names, values))


class DBConnector:
    """One database connection opened with the credentials of an access role.

    Construction resolves the role's credentials from the environment, builds
    the connection string for the engine and opens the connection. The
    connection is held until :meth:`close` and is never re-created.

    Rows come back as ``dict`` objects keyed by column name in column order,
    with column names exactly as the server reports them. Query errors are
    SQLAlchemy's own exceptions, raised unchanged.

    Parameters are either a mapping for ``:name`` placeholders or a sequence
    for ``?`` placeholders, on every engine. Without parameters the statement
    reaches the driver unchanged, so a literal ``%`` needs no escaping.

    Outside :meth:`begin` every statement is committed on success and rolled
    back on failure. Between :meth:`begin` and :meth:`commit` or
    :meth:`rollback` statements share one transaction.

    Instances are not thread-safe. Use one instance per thread or task, or
    serialise access externally.

    Example::

        with DBConnector("pgsql", "shop", "readonly") as db:
            user = db.fetch_one("SELECT * FROM users WHERE id = :id", {"id": 7})
    """

    def __init__(self, driver: Union[str, DatabaseType], database: str, role: Union[str, Role]) -> None:
        """Open the connection.

        Args:
            driver: ``'pgsql'`` or ``'mysql'`` (any case).
            database: Database name.
            role: ``'readonly'``, ``'insertupdate'``, ``'delete'`` or ``'auth'``.

        Raises:
            UnsupportedRoleError: If the role is unknown.
            IncompleteCredentialsError: If the role's credentials are not set.
            UnsupportedEngineError: If the engine is unknown.
            ConnectionFailedError: If the connection cannot be opened.
        """
        self._adapter = resolve_adapter(driver, database, role)
        self._engine, self._conn = self._adapter.connect()
        self._transaction: Optional[RootTransaction] = None

    @property
    def descriptor(self) -> ConnectionDescriptor:
        """Engine, database name and role of this connection."""
        return self._adapter.descriptor

    @property
    def db_type(self) -> DatabaseType:
        return self._adapter.descriptor.db_type

    @property
    def role(self) -> Role:
        return self._adapter.descriptor.role

    @property
    def dsn(self) -> str:
        """Connection string used to connect, without credentials."""
        return self._adapter.build_connection_string()

    def get_connection(self) -> Connection:
        """Return the raw SQLAlchemy connection.

        This bypasses the helpers below, including their commit handling.
        """
        return self._conn

    def fetch_one(self, sql: str, params: Params = None) -> Optional[Dict[str, Any]]:
        """Return the first row, or None if the query returned no rows."""
        with self._autocommit():
            row = self._run(sql, params).mappings().first()
        return dict(row) if row is not None else None

    def fetch_all(self, sql: str, params: Params = None) -> List[Dict[str, Any]]:
        """Return every row, in result order."""
        with self._autocommit():
            rows = self._run(sql, params).mappings().all()
        return [dict(row) for row in rows]

    def execute(self, sql: str, params: Params = None) -> int:
        """Run a data-modifying statement and return the affected row count."""
        with self._autocommit():
            result = self._run(sql, params)
            rowcount = result.rowcount
            result.close()
        return rowcount

    def fetch_column(self, sql: str, params: Params = None) -> Any:
        """Return the first column of the first row, or None if there are no rows.

        A NULL in that column also comes back as None; use :meth:`fetch_one`
        when the two cases must be told apart.
        """
        with self._autocommit():
            return self._run(sql, params).scalar()

    def begin(self) -> None:
        logger.debug("BEGIN on %s", self._adapter.descriptor.database)
        self._transaction = self._conn.begin()

    def commit(self) -> None:
        logger.debug("COMMIT on %s", self._adapter.descriptor.database)
        try:
            self._conn.commit()
        finally:
            self._transaction = None

    def rollback(self) -> None:
        logger.debug("ROLLBACK on %s", self._adapter.descriptor.database)
        try:
            self._conn.rollback()
        finally:
            self._transaction = None

    def close(self) -> None:
        """Close the connection and dispose of its engine."""
        self._transaction = None
        try:
            self._conn.close()
        finally:
            self._engine.dispose()

    def __enter__(self) -> "DBConnector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _run(self, sql: str, params: Params) -> CursorResult:
        if isinstance(params, (str, bytes)):
            raise TypeError(
                f"params must be a mapping or a sequence of values, not {type(params).__name__}"
            )
        if isinstance(params, Mapping):
            return self._conn.execute(text(sql), dict(params))
        if params:
            statement, binds = bind_positional(sql, params)
            return self._conn.execute(text(statement), binds)
        # No binds: the driver must not apply its own %-formatting.
        return self._conn.exec_driver_sql(sql, execution_options={"no_parameters": True})

    @contextmanager
    def _autocommit(self) -> Generator[None, None, None]:
        if self._transaction is not None:
            yield
            return

        try:
            yield
        except Exception:
            try:
                self._conn.rollback()
            except Exception:
                logger.warning(
                    "Rollback after a failed statement on %s also failed",
                    self._adapter.descriptor.database, exc_info=True,
                )
            raise
        self._conn.commit()
