"""YouTube integration: playlist API client and OAuth2 token management."""

from .api_client import (
    PlaylistNotFoundError,
    YouTubeAPIClient,
    YouTubeAPIError,
    YouTubeDecodeError,
    YouTubeHTTPError,
    YouTubeTransportError,
)
from .oauth import (
    ClientCredentials,
    TokenManager,
    TokenStore,
)

__all__ = [
    "YouTubeAPIClient",
    "YouTubeAPIError",
    "YouTubeHTTPError",
    "YouTubeTransportError",
    "YouTubeDecodeError",
    "PlaylistNotFoundError",
    "ClientCredentials",
    "TokenManager",
    "TokenStore",
]
