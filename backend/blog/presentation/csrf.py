"""Cross-site request forgery guard for write routes.

Browsers attach cached basic-auth credentials to cross-site requests, so a
write is only accepted when the browser says it came from this site. A
request carrying no ``Origin`` (curl, scripts) is not browser-initiated and
passes through to the credential check.
"""

import logging
from urllib.parse import urlsplit

from fastapi import Depends, HTTPException, Request, status

from blog.config import Settings
from blog.infrastructure.dependencies import get_app_settings

logger = logging.getLogger(__name__)


def _forbidden(request: Request, reason: str) -> HTTPException:
    logger.warning("Rejected cross-site %s %s: %s", request.method, request.url.path, reason)
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Cross-site request rejected.",
    )


def require_same_origin(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Reject browser writes whose Origin is not this host or a trusted origin."""
    if request.headers.get("sec-fetch-site") == "cross-site":
        raise _forbidden(request, "Sec-Fetch-Site is cross-site")

    origin = request.headers.get("origin")
    if origin is None:
        return None
    if origin in settings.trusted_origins:
        return None

    host = request.headers.get("host", "")
    if not host or urlsplit(origin).netloc != host:
        raise _forbidden(request, f"Origin {origin!r} does not match host {host!r}")
    return None
