"""HTTP Basic authentication for the API and admin routers.

The authenticator only returns a pass/fail decision; a failure is raised as
``UnauthorizedError`` and rendered by the shared error handlers as a 401 with
a ``WWW-Authenticate: Basic`` challenge.
"""

import secrets
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from loguru import logger

from api_skeleton.core.config import AuthConfig, Settings
from api_skeleton.core.exceptions import UnauthorizedError

# auto_error=False so missing credentials reach our own error format
basic_auth = HTTPBasic(auto_error=False)


class BasicAuthenticator:
    """Compares credentials with the configured username and password."""

    def __init__(self, auth_config: AuthConfig) -> None:
        self._username = auth_config.username.encode()
        self._password = auth_config.password.encode()

    def authenticate(self, credentials: HTTPBasicCredentials | None) -> bool:
        """Return True when ``credentials`` match the configured ones."""
        if credentials is None:
            return False
        username_ok = secrets.compare_digest(
            credentials.username.encode(), self._username
        )
        password_ok = secrets.compare_digest(
            credentials.password.encode(), self._password
        )
        return username_ok and password_ok


async def require_authentication(
    request: Request,
    credentials: Annotated[HTTPBasicCredentials | None, Depends(basic_auth)],
) -> str:
    """Reject the request unless the authenticator accepts its credentials.

    Returns:
        str: The authenticated username.

    Raises:
        UnauthorizedError: If credentials are missing or wrong.
    """
    settings: Settings = request.app.state.settings
    if not BasicAuthenticator(settings.auth_config).authenticate(credentials):
        logger.info(
            "Authentication failed",
            username=credentials.username if credentials else None,
        )
        raise UnauthorizedError("Unauthorized")
    return credentials.username if credentials else ""
