"""
Bearer token gate for the /api routes.

Callers present the YouTube access token obtained from /auth/youtube in the
Authorization header; it is passed through to the YouTube API unchanged.
"""

import logging
from typing import Optional

from fastapi import Header

from src.errors import UnauthorizedError
from src.youtube.oauth import TokenManager

logger = logging.getLogger(__name__)


def parse_bearer_token(authorization: Optional[str]) -> str:
    """
    Extract the token from an Authorization header value.

    Raises:
        UnauthorizedError: If the header is missing, not a Bearer credential,
            or carries an empty token.
    """
    if not authorization:
        raise UnauthorizedError("Authorization header required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise UnauthorizedError("Invalid authorization header format")

    token = parts[1]
    if not token:
        raise UnauthorizedError("Access token required")

    if not TokenManager.validate_token(token):
        raise UnauthorizedError("Invalid or expired token")

    return token


async def get_access_token(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """
    FastAPI dependency returning the caller's bearer token.

    Raises:
        UnauthorizedError: 401 if the token is missing or malformed.
    """
    return parse_bearer_token(authorization)
