"""Resolution of roles, credentials and engines from caller input."""

import logging
import os
from typing import Any

from dbconnector.config.models import (
    ROLE_ENV_VARS,
    Credentials,
    DatabaseType,
    Role,
)
from dbconnector.exceptions import (
    IncompleteCredentialsError,
    UnsupportedEngineError,
    UnsupportedRoleError,
)

logger = logging.getLogger(__name__)


def parse_role(value: Any) -> Role:
    """Map a role name onto :class:`Role`.

    Raises:
        UnsupportedRoleError: If the value is not a known role.
    """
    try:
        return Role(value)
    except ValueError:
        raise UnsupportedRoleError(value) from None


def parse_database_type(value: Any) -> DatabaseType:
    """Map an engine name onto :class:`DatabaseType`, ignoring case.

    Raises:
        UnsupportedEngineError: If the value is not a known engine.
    """
    normalized = value.lower() if isinstance(value, str) else value
    try:
        return DatabaseType(normalized)
    except ValueError:
        raise UnsupportedEngineError(normalized) from None


def resolve_credentials(role: Role) -> Credentials:
    """Read the username and password for ``role`` from the environment.

    Raises:
        IncompleteCredentialsError: If either variable is unset or empty.
    """
    user_var, password_var = ROLE_ENV_VARS[role]
    username = os.environ.get(user_var, "")
    password = os.environ.get(password_var, "")

    if not username or not password:
        raise IncompleteCredentialsError(
            role.value,
            details={"variables": [user_var, password_var]},
        )

    logger.debug("Resolved credentials for role %s from %s", role.value, user_var)
    return Credentials(username=username, password=password)
