"""Static bearer token authentication."""
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme; missing/malformed headers are handled below, not by FastAPI
security = HTTPBearer(auto_error=False)


class UnauthorizedError(Exception):
    """Raised when a request lacks the expected bearer token."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__("Unauthorized request")


def is_valid_token(token: str | None, settings: Settings) -> bool:
    """Constant-time comparison against the configured API token."""
    if not token or not settings.api_token:
        return False
    return secrets.compare_digest(token.encode(), settings.api_token.encode())


async def require_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Reject requests whose Authorization header does not carry API_TOKEN.

    In DEV_MODE the check is skipped entirely.

    Raises:
        UnauthorizedError: Handled in api.main as a 401 response.
    """
    if settings.dev_mode:
        return

    token = credentials.credentials if credentials is not None else None
    if not is_valid_token(token, settings):
        logger.error("Unauthorized request to path: %s", request.url.path)
        raise UnauthorizedError(request.url.path)
