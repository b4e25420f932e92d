"""Tests for YouTube API client."""

import json
from unittest.mock import MagicMock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from src.youtube.api_client import (
    PlaylistNotFoundError,
    YouTubeAPIClient,
    YouTubeDecodeError,
    YouTubeHTTPError,
    YouTubeTransportError,
    clamp_playlists_page_size,
)


@pytest.fixture
def mock_youtube():
    """Create a mock YouTube service resource."""
    return MagicMock()


@pytest.fixture
def api_client(mock_youtube):
    """Create a YouTube API client with a mocked service."""
    client = YouTubeAPIClient(access_token="test_access_token")
    client._youtube = mock_youtube
    return client


def _http_error(status, body):
    resp = httplib2.Response({"status": status})
    return HttpError(resp, body.encode("utf-8"))


class TestClampPlaylistsPageSize:
    """Tests for maxResults clamping."""

    def test_default_when_not_positive(self):
        assert clamp_playlists_page_size(0) == 25
        assert clamp_playlists_page_size(-3) == 25
        assert clamp_playlists_page_size(None) == 25

    def test_upper_bound(self):
        assert clamp_playlists_page_size(51) == 50
        assert clamp_playlists_page_size(500) == 50

    def test_in_range(self):
        assert clamp_playlists_page_size(1) == 1
        assert clamp_playlists_page_size(50) == 50


class TestYouTubeAPIClient:
    """Tests for YouTubeAPIClient."""

    def test_init(self):
        """Test client initialization."""
        client = YouTubeAPIClient(access_token="tok")
        assert client.access_token == "tok"
        assert client._youtube is None

    def test_youtube_builds_service_with_bearer_credentials(self):
        """Test the service is built lazily with the access token."""
        client = YouTubeAPIClient(access_token="tok")
        with patch("src.youtube.api_client.build") as mock_build:
            service = client.youtube
            assert client.youtube is service

        mock_build.assert_called_once()
        args, kwargs = mock_build.call_args
        assert args == ("youtube", "v3")
        assert kwargs["credentials"].token == "tok"

    def test_list_playlists_defaults(self, api_client, mock_youtube):
        """Test default parameters for listing the user's playlists."""
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        api_client.list_playlists()

        mock_youtube.playlists().list.assert_called_with(
            part="snippet,status,contentDetails", maxResults=25, mine=True
        )

    def test_list_playlists_with_channel_and_page_token(self, api_client, mock_youtube):
        """Test channel ID replaces mine and page token is forwarded."""
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        api_client.list_playlists(channel_id="UC1", max_results=80, page_token="NEXT")

        mock_youtube.playlists().list.assert_called_with(
            part="snippet,status,contentDetails",
            maxResults=50,
            channelId="UC1",
            pageToken="NEXT",
        )

    def test_list_playlists_custom_part(self, api_client, mock_youtube):
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        api_client.list_playlists(part="snippet", max_results=5)

        mock_youtube.playlists().list.assert_called_with(
            part="snippet", maxResults=5, mine=True
        )

    def test_list_playlists_returns_decoded_response(self, api_client, mock_youtube, playlist_item):
        response = {"items": [playlist_item], "nextPageToken": "N"}
        mock_youtube.playlists().list().execute.return_value = response

        assert api_client.list_playlists() == response

    def test_list_my_playlists(self, api_client, mock_youtube):
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        api_client.list_my_playlists()

        mock_youtube.playlists().list.assert_called_with(
            part="snippet,status,contentDetails", maxResults=50, mine=True
        )

    def test_get_playlist(self, api_client, mock_youtube, playlist_item):
        mock_youtube.playlists().list().execute.return_value = {"items": [playlist_item]}

        assert api_client.get_playlist("PL123") == playlist_item
        mock_youtube.playlists().list.assert_called_with(
            part="snippet,status,contentDetails", id="PL123"
        )

    def test_get_playlist_not_found(self, api_client, mock_youtube):
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        with pytest.raises(PlaylistNotFoundError) as exc_info:
            api_client.get_playlist("PLmissing")

        assert exc_info.value.playlist_id == "PLmissing"

    def test_list_playlist_items(self, api_client, mock_youtube, playlist_items_response):
        mock_youtube.playlistItems().list().execute.return_value = playlist_items_response

        result = api_client.list_playlist_items("PL123", 10)

        assert result == playlist_items_response
        mock_youtube.playlistItems().list.assert_called_with(
            part="snippet", playlistId="PL123", maxResults=10
        )

    def test_list_playlist_items_default_page_size(self, api_client, mock_youtube):
        mock_youtube.playlistItems().list().execute.return_value = {"items": []}

        api_client.list_playlist_items("PL123", 0)

        mock_youtube.playlistItems().list.assert_called_with(
            part="snippet", playlistId="PL123", maxResults=50
        )

    def test_list_playlist_items_has_no_upper_clamp(self, api_client, mock_youtube):
        mock_youtube.playlistItems().list().execute.return_value = {"items": []}

        api_client.list_playlist_items("PL123", 200)

        mock_youtube.playlistItems().list.assert_called_with(
            part="snippet", playlistId="PL123", maxResults=200
        )

    def test_http_error_carries_status_and_body(self, api_client, mock_youtube):
        body = json.dumps({"error": {"code": 403, "message": "quotaExceeded"}})
        mock_youtube.playlists().list().execute.side_effect = _http_error(403, body)

        with pytest.raises(YouTubeHTTPError) as exc_info:
            api_client.list_playlists()

        assert exc_info.value.status == 403
        assert exc_info.value.body == body

    def test_transport_error(self, api_client, mock_youtube):
        mock_youtube.playlists().list().execute.side_effect = ConnectionError("connection reset")

        with pytest.raises(YouTubeTransportError):
            api_client.list_playlists()

    def test_decode_error(self, api_client, mock_youtube):
        mock_youtube.playlistItems().list().execute.side_effect = json.JSONDecodeError(
            "Expecting value", "<html>", 0
        )

        with pytest.raises(YouTubeDecodeError):
            api_client.list_playlist_items("PL123")

    def test_requests_are_not_retried(self, api_client, mock_youtube):
        mock_youtube.playlists().list().execute.return_value = {"items": []}

        api_client.list_playlists()

        mock_youtube.playlists().list().execute.assert_called_with(num_retries=0)
