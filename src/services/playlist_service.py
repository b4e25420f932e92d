"""Playlist service: maps YouTube API playlist resources to the API response models."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.errors import InternalServerError, NotFoundError
from src.web.models import (
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistsResponse,
    VideoResponse,
)
from src.youtube.api_client import (
    DEFAULT_ITEMS_PAGE_SIZE,
    PlaylistNotFoundError,
    YouTubeAPIClient,
    YouTubeAPIError,
    YouTubeHTTPError,
)

logger = logging.getLogger(__name__)

# Stand-in for timestamps that are missing or cannot be parsed
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

THUMBNAIL_PREFERENCE = ("medium", "default")


def select_thumbnail(thumbnails: Optional[dict]) -> str:
    """Pick the medium thumbnail URL, falling back to default, else empty."""
    if not thumbnails:
        return ""
    for size in THUMBNAIL_PREFERENCE:
        thumbnail = thumbnails.get(size)
        if thumbnail is not None:
            return thumbnail.get("url", "")
    return ""


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse an RFC 3339 timestamp from the API.

    Missing or malformed values yield EPOCH. Malformed values are logged so
    they can be told apart from genuine epoch dates.
    """
    if not value:
        logger.debug("Missing timestamp, using epoch")
        return EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp {value!r}, using epoch")
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_playlist_response(item: dict) -> PlaylistResponse:
    """Flatten an API playlist resource."""
    snippet = item.get("snippet", {})
    return PlaylistResponse(
        id=item.get("id", ""),
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        video_count=item.get("contentDetails", {}).get("itemCount", 0),
        privacy_status=item.get("status", {}).get("privacyStatus", ""),
        created_at=parse_timestamp(snippet.get("publishedAt")),
        channel_title=snippet.get("channelTitle", ""),
        thumbnail_url=select_thumbnail(snippet.get("thumbnails")),
    )


def to_video_response(item: dict) -> VideoResponse:
    """Flatten an API playlistItem resource."""
    snippet = item.get("snippet", {})
    return VideoResponse(
        id=snippet.get("resourceId", {}).get("videoId", ""),
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        channel_title=snippet.get("channelTitle", ""),
        position=snippet.get("position", 0),
        added_at=parse_timestamp(snippet.get("publishedAt")),
        thumbnail_url=select_thumbnail(snippet.get("thumbnails")),
    )


class PlaylistService:
    """Reads playlists through the YouTube API on behalf of a bearer token."""

    def __init__(
        self,
        client_factory: Callable[[str], YouTubeAPIClient] = YouTubeAPIClient,
        items_page_size: int = DEFAULT_ITEMS_PAGE_SIZE,
    ):
        """Initialize the playlist service.

        Args:
            client_factory: Builds an API client for an access token.
            items_page_size: Number of items fetched for playlist details and exports.
        """
        self.client_factory = client_factory
        self.items_page_size = items_page_size

    def get_playlists(
        self,
        access_token: str,
        max_results: int = 25,
        page_token: Optional[str] = None,
    ) -> PlaylistsResponse:
        """Get one page of the user's playlists, keeping the upstream page tokens."""
        client = self.client_factory(access_token)
        try:
            response = client.list_playlists(
                mine=True, max_results=max_results, page_token=page_token
            )
        except YouTubeAPIError as e:
            raise InternalServerError("Failed to fetch playlists", cause=e) from e

        playlists = [to_playlist_response(item) for item in response.get("items", [])]

        return PlaylistsResponse(
            playlists=playlists,
            total_count=response.get("pageInfo", {}).get("totalResults", 0),
            next_page_token=response.get("nextPageToken") or None,
            prev_page_token=response.get("prevPageToken") or None,
        )

    def get_playlist(self, access_token: str, playlist_id: str) -> PlaylistDetailResponse:
        """Get a playlist with the first page of its videos."""
        client = self.client_factory(access_token)

        try:
            playlist = client.get_playlist(playlist_id)
        except PlaylistNotFoundError as e:
            raise NotFoundError("Playlist not found", cause=e) from e
        except YouTubeHTTPError as e:
            if e.status == 404:
                raise NotFoundError("Playlist not found", cause=e) from e
            raise InternalServerError("Failed to fetch playlist", cause=e) from e
        except YouTubeAPIError as e:
            raise InternalServerError("Failed to fetch playlist", cause=e) from e

        videos = self._fetch_videos(client, playlist_id, self.items_page_size)

        summary = to_playlist_response(playlist)
        return PlaylistDetailResponse(**summary.model_dump(), videos=videos)

    def get_playlist_songs(
        self, access_token: str, playlist_id: str, max_results: int = DEFAULT_ITEMS_PAGE_SIZE
    ) -> list[VideoResponse]:
        """Get the videos of a playlist without its metadata."""
        client = self.client_factory(access_token)
        return self._fetch_videos(client, playlist_id, max_results)

    def _fetch_videos(
        self, client: YouTubeAPIClient, playlist_id: str, max_results: int
    ) -> list[VideoResponse]:
        try:
            response = client.list_playlist_items(playlist_id, max_results)
        except YouTubeAPIError as e:
            raise InternalServerError("Failed to fetch playlist items", cause=e) from e

        videos = [to_video_response(item) for item in response.get("items", [])]
        logger.info(f"Fetched {len(videos)} videos for playlist {playlist_id}")
        return videos
