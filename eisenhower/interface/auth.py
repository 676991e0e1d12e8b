"""HTTP Basic authentication against the configured single user."""

import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from eisenhower.core.config import constants, settings


logger = logging.getLogger(__name__)

security = HTTPBasic(auto_error=False, realm=constants.AUTH_REALM)


def _challenge() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": f'Basic realm="{constants.AUTH_REALM}"'},
    )


def credentials_match(*, username: str, password: str) -> bool:
    """Compare presented credentials with the configured pair in constant time."""
    username_ok = secrets.compare_digest(username.encode("utf-8"), settings.eisenhower_username.encode("utf-8"))
    password_ok = secrets.compare_digest(password.encode("utf-8"), settings.eisenhower_password.encode("utf-8"))
    return username_ok and password_ok


async def require_basic_auth(
    request: Request,
    credentials: HTTPBasicCredentials | None = Depends(security),
) -> str:
    """Reject the request with a 401 challenge unless valid credentials were sent.

    Returns:
        The authenticated username
    """
    if credentials is None:
        logger.warning("auth_missing_credentials", extra={"path": request.url.path})
        raise _challenge()

    if not credentials_match(username=credentials.username, password=credentials.password):
        logger.warning("auth_invalid_credentials", extra={"path": request.url.path})
        raise _challenge()

    return credentials.username
