"""YouTube Data API v3 client for playlist reads on behalf of a user."""

import logging
from typing import Optional

import httplib2
from google.auth.exceptions import TransportError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

DEFAULT_PLAYLIST_PART = "snippet,status,contentDetails"
DEFAULT_PLAYLISTS_PAGE_SIZE = 25
MAX_PLAYLISTS_PAGE_SIZE = 50
DEFAULT_ITEMS_PAGE_SIZE = 50


class YouTubeAPIError(Exception):
    """Base class for upstream API failures."""


class YouTubeHTTPError(YouTubeAPIError):
    """The upstream API answered with a non-success status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"YouTube API returned status {status}: {body}")
        self.status = status
        self.body = body


class YouTubeTransportError(YouTubeAPIError):
    """The request never produced an HTTP response."""


class YouTubeDecodeError(YouTubeAPIError):
    """The response body was not valid JSON."""


class PlaylistNotFoundError(YouTubeAPIError):
    """A playlist lookup by ID returned no items."""

    def __init__(self, playlist_id: str):
        super().__init__(f"Playlist not found: {playlist_id}")
        self.playlist_id = playlist_id


def clamp_playlists_page_size(max_results: Optional[int]) -> int:
    """Clamp a playlists page size to the 1..50 range the API accepts."""
    if not max_results or max_results <= 0:
        return DEFAULT_PLAYLISTS_PAGE_SIZE
    return min(max_results, MAX_PLAYLISTS_PAGE_SIZE)


class YouTubeAPIClient:
    """Client for the playlist endpoints of the YouTube Data API v3."""

    def __init__(self, access_token: str):
        """Initialize the YouTube API client.

        Args:
            access_token: OAuth2 access token sent as a bearer credential.
        """
        self.access_token = access_token
        self._youtube = None

    @property
    def youtube(self):
        """Lazy-load the YouTube API service."""
        if self._youtube is None:
            credentials = Credentials(token=self.access_token)
            self._youtube = build(
                "youtube", "v3", credentials=credentials, cache_discovery=False
            )
        return self._youtube

    def list_playlists(
        self,
        part: Optional[str] = None,
        mine: Optional[bool] = None,
        channel_id: Optional[str] = None,
        max_results: int = DEFAULT_PLAYLISTS_PAGE_SIZE,
        page_token: Optional[str] = None,
    ) -> dict:
        """List playlists for the authenticated user or a channel.

        Args:
            part: Comma separated resource parts (default snippet,status,contentDetails).
            mine: Request the authenticated user's playlists. Defaults to True
                when no channel ID is given.
            channel_id: Channel whose playlists to list.
            max_results: Page size, clamped to 1..50 (25 when not positive).
            page_token: Upstream pagination token.

        Returns:
            Decoded playlists list response.
        """
        if mine is None:
            mine = not channel_id

        params = {
            "part": part or DEFAULT_PLAYLIST_PART,
            "maxResults": clamp_playlists_page_size(max_results),
        }
        if mine:
            params["mine"] = True
        if channel_id:
            params["channelId"] = channel_id
        if page_token:
            params["pageToken"] = page_token

        return self._execute(self.youtube.playlists().list(**params), "list playlists")

    def list_my_playlists(self) -> dict:
        """List the first 50 playlists of the authenticated user."""
        return self.list_playlists(mine=True, max_results=MAX_PLAYLISTS_PAGE_SIZE)

    def get_playlist(self, playlist_id: str) -> dict:
        """Get a single playlist by ID.

        Raises:
            PlaylistNotFoundError: If the API returns no items for the ID.
        """
        response = self._execute(
            self.youtube.playlists().list(part=DEFAULT_PLAYLIST_PART, id=playlist_id),
            f"get playlist {playlist_id}",
        )

        items = response.get("items") or []
        if not items:
            raise PlaylistNotFoundError(playlist_id)
        return items[0]

    def list_playlist_items(
        self, playlist_id: str, max_results: int = DEFAULT_ITEMS_PAGE_SIZE
    ) -> dict:
        """List one page of the items in a playlist.

        Args:
            playlist_id: YouTube playlist ID.
            max_results: Page size; 50 when not positive.

        Returns:
            Decoded playlistItems list response.
        """
        if not max_results or max_results <= 0:
            max_results = DEFAULT_ITEMS_PAGE_SIZE

        return self._execute(
            self.youtube.playlistItems().list(
                part="snippet", playlistId=playlist_id, maxResults=max_results
            ),
            f"list items of playlist {playlist_id}",
        )

    def _execute(self, request, action: str) -> dict:
        """Run a prepared API request and translate its failures."""
        try:
            return request.execute(num_retries=0)
        except HttpError as e:
            status = e.resp.status
            body = e.content
            if isinstance(body, bytes):
                body = body.decode("utf-8", errors="replace")
            logger.error(f"YouTube API error during {action}: status {status}")
            raise YouTubeHTTPError(status, body) from e
        except (httplib2.HttpLib2Error, TransportError, OSError) as e:
            logger.error(f"Transport error during {action}: {e}")
            raise YouTubeTransportError(f"Request failed during {action}: {e}") from e
        except ValueError as e:
            logger.error(f"Could not decode YouTube response during {action}: {e}")
            raise YouTubeDecodeError(f"Invalid JSON during {action}: {e}") from e
