"""Tests for the playlist service and its mapping helpers."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from src.errors import InternalServerError, NotFoundError
from src.services.playlist_service import (
    EPOCH,
    PlaylistService,
    parse_timestamp,
    select_thumbnail,
    to_playlist_response,
    to_video_response,
)
from src.youtube.api_client import (
    PlaylistNotFoundError,
    YouTubeHTTPError,
    YouTubeTransportError,
)


@pytest.fixture
def mock_client():
    return Mock()


@pytest.fixture
def service(mock_client):
    return PlaylistService(client_factory=Mock(return_value=mock_client))


class TestSelectThumbnail:
    """Tests for thumbnail preference."""

    def test_prefers_medium(self):
        thumbnails = {
            "default": {"url": "d"},
            "medium": {"url": "m"},
            "high": {"url": "h"},
        }
        assert select_thumbnail(thumbnails) == "m"

    def test_falls_back_to_default(self):
        assert select_thumbnail({"default": {"url": "d"}, "high": {"url": "h"}}) == "d"

    def test_empty_when_neither_present(self):
        assert select_thumbnail({"high": {"url": "h"}}) == ""
        assert select_thumbnail({}) == ""
        assert select_thumbnail(None) == ""


class TestParseTimestamp:
    """Tests for RFC 3339 parsing with the epoch fallback."""

    def test_utc_z_suffix(self):
        assert parse_timestamp("2024-03-01T10:15:00Z") == datetime(
            2024, 3, 1, 10, 15, tzinfo=timezone.utc
        )

    def test_offset(self):
        parsed = parse_timestamp("2024-03-01T12:15:00+02:00")
        assert parsed == datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)

    def test_missing_is_epoch(self):
        assert parse_timestamp(None) == EPOCH
        assert parse_timestamp("") == EPOCH

    def test_malformed_is_epoch_and_logged(self, caplog):
        with caplog.at_level("WARNING"):
            assert parse_timestamp("yesterday") == EPOCH
        assert "yesterday" in caplog.text


class TestMapping:
    """Tests for flattening API resources."""

    def test_to_playlist_response(self, playlist_item):
        playlist = to_playlist_response(playlist_item)

        assert playlist.id == "PL123"
        assert playlist.title == "My Mix"
        assert playlist.description == "Songs I like"
        assert playlist.video_count == 1
        assert playlist.privacy_status == "private"
        assert playlist.channel_title == "Me"
        assert playlist.thumbnail_url == "https://i.ytimg.com/medium.jpg"
        assert playlist.created_at == datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)

    def test_to_playlist_response_defaults_missing_fields(self):
        playlist = to_playlist_response({"id": "PLbare"})

        assert playlist.title == ""
        assert playlist.video_count == 0
        assert playlist.privacy_status == ""
        assert playlist.thumbnail_url == ""
        assert playlist.created_at == EPOCH

    def test_to_video_response(self, playlist_items_response):
        video = to_video_response(playlist_items_response["items"][0])

        assert video.id == "abc123"
        assert video.title == "SongY"
        assert video.channel_title == "ChanX"
        assert video.position == 0
        assert video.thumbnail_url == "https://i.ytimg.com/vi/abc123/default.jpg"
        assert video.added_at == datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)


class TestGetPlaylists:
    """Tests for PlaylistService.get_playlists."""

    def test_maps_items_and_page_tokens(self, service, mock_client, playlist_item):
        second = dict(playlist_item, id="PL456")
        mock_client.list_playlists.return_value = {
            "items": [playlist_item, second],
            "pageInfo": {"totalResults": 7, "resultsPerPage": 2},
            "nextPageToken": "NEXT",
            "prevPageToken": "PREV",
        }

        result = service.get_playlists("tok", max_results=2, page_token="CUR")

        mock_client.list_playlists.assert_called_once_with(
            mine=True, max_results=2, page_token="CUR"
        )
        assert [p.id for p in result.playlists] == ["PL123", "PL456"]
        assert result.total_count == 7
        assert result.next_page_token == "NEXT"
        assert result.prev_page_token == "PREV"

    def test_uses_access_token(self, mock_client):
        factory = Mock(return_value=mock_client)
        mock_client.list_playlists.return_value = {"items": []}

        PlaylistService(client_factory=factory).get_playlists("user-token")

        factory.assert_called_once_with("user-token")

    def test_missing_page_tokens_are_none(self, service, mock_client):
        mock_client.list_playlists.return_value = {"items": []}

        result = service.get_playlists("tok")

        assert result.playlists == []
        assert result.total_count == 0
        assert result.next_page_token is None
        assert result.prev_page_token is None

    def test_upstream_error_is_internal(self, service, mock_client):
        mock_client.list_playlists.side_effect = YouTubeHTTPError(401, "unauthorized")

        with pytest.raises(InternalServerError):
            service.get_playlists("tok")


class TestGetPlaylist:
    """Tests for PlaylistService.get_playlist."""

    def test_combines_metadata_and_items(
        self, service, mock_client, playlist_item, playlist_items_response
    ):
        mock_client.get_playlist.return_value = playlist_item
        mock_client.list_playlist_items.return_value = playlist_items_response

        detail = service.get_playlist("tok", "PL123")

        mock_client.list_playlist_items.assert_called_once_with("PL123", 50)
        assert detail.id == "PL123"
        assert detail.title == "My Mix"
        assert len(detail.videos) == 1
        assert detail.videos[0].id == "abc123"

    def test_preserves_upstream_order(self, service, mock_client, playlist_item):
        items = [
            {"snippet": {"position": 2, "resourceId": {"videoId": "c"}}},
            {"snippet": {"position": 0, "resourceId": {"videoId": "a"}}},
            {"snippet": {"position": 0, "resourceId": {"videoId": "a"}}},
        ]
        mock_client.get_playlist.return_value = playlist_item
        mock_client.list_playlist_items.return_value = {"items": items}

        detail = service.get_playlist("tok", "PL123")

        assert [v.id for v in detail.videos] == ["c", "a", "a"]

    def test_custom_page_size(self, mock_client, playlist_item):
        mock_client.get_playlist.return_value = playlist_item
        mock_client.list_playlist_items.return_value = {"items": []}
        service = PlaylistService(client_factory=Mock(return_value=mock_client), items_page_size=10)

        service.get_playlist("tok", "PL123")

        mock_client.list_playlist_items.assert_called_once_with("PL123", 10)

    def test_not_found(self, service, mock_client):
        mock_client.get_playlist.side_effect = PlaylistNotFoundError("PLx")

        with pytest.raises(NotFoundError):
            service.get_playlist("tok", "PLx")
        mock_client.list_playlist_items.assert_not_called()

    def test_upstream_404_is_not_found(self, service, mock_client):
        mock_client.get_playlist.side_effect = YouTubeHTTPError(404, "playlistNotFound")

        with pytest.raises(NotFoundError):
            service.get_playlist("tok", "PLx")

    def test_metadata_transport_error_is_internal(self, service, mock_client):
        mock_client.get_playlist.side_effect = YouTubeTransportError("boom")

        with pytest.raises(InternalServerError):
            service.get_playlist("tok", "PL123")

    def test_items_error_is_internal(self, service, mock_client, playlist_item):
        mock_client.get_playlist.return_value = playlist_item
        mock_client.list_playlist_items.side_effect = YouTubeHTTPError(500, "backend")

        with pytest.raises(InternalServerError) as exc_info:
            service.get_playlist("tok", "PL123")

        assert exc_info.value.message == "Failed to fetch playlist items"


class TestGetPlaylistSongs:
    """Tests for PlaylistService.get_playlist_songs."""

    def test_returns_videos(self, service, mock_client, playlist_items_response):
        mock_client.list_playlist_items.return_value = playlist_items_response

        videos = service.get_playlist_songs("tok", "PL123", 5)

        mock_client.list_playlist_items.assert_called_once_with("PL123", 5)
        mock_client.get_playlist.assert_not_called()
        assert [v.title for v in videos] == ["SongY"]
