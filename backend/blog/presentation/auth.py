"""Basic-auth dependency for write routes.

One shared username/password pair from Settings; no sessions, tokens or
per-user identity.
"""

import logging
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from blog.config import Settings
from blog.infrastructure.dependencies import get_app_settings

logger = logging.getLogger(__name__)

_basic = HTTPBasic(realm="blog")


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def require_credentials(
    credentials: HTTPBasicCredentials = Depends(_basic),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Reject the request with 401 unless it carries the configured credential."""
    if not settings.basic_username or not settings.basic_password:
        logger.warning("Basic auth credential is not configured; refusing write access")
        accepted = False
    else:
        # Evaluate both comparisons so timing does not reveal which one failed.
        user_ok = _matches(credentials.username, settings.basic_username)
        password_ok = _matches(credentials.password, settings.basic_password)
        accepted = user_ok and password_ok

    if not accepted:
        logger.warning("Rejected credentials for user '%s'", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
            headers={"WWW-Authenticate": 'Basic realm="blog"'},
        )
    return credentials.username
