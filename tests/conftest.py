"""
Pytest configuration and fixtures for playlist export tests.

This module runs before any test imports, setting up the test environment.
Environment variables are explicitly set to ensure deterministic test behavior
regardless of external environment configuration.
"""

import os

import pytest

os.environ["ENVIRONMENT"] = "test"
os.environ["GOOGLE_CREDENTIALS_FILE"] = "/nonexistent/credentials.json"
os.environ["TOKEN_FILE"] = "/nonexistent/token.json"
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def playlist_item():
    """A playlists.list resource as returned by the YouTube API."""
    return {
        "kind": "youtube#playlist",
        "id": "PL123",
        "snippet": {
            "publishedAt": "2024-03-01T10:15:00Z",
            "channelId": "UC999",
            "title": "My Mix",
            "description": "Songs I like",
            "channelTitle": "Me",
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/default.jpg", "width": 120, "height": 90},
                "medium": {"url": "https://i.ytimg.com/medium.jpg", "width": 320, "height": 180},
            },
        },
        "status": {"privacyStatus": "private"},
        "contentDetails": {"itemCount": 1},
    }


@pytest.fixture
def playlist_items_response():
    """A playlistItems.list response with a single video."""
    return {
        "kind": "youtube#playlistItemListResponse",
        "pageInfo": {"totalResults": 1, "resultsPerPage": 50},
        "items": [
            {
                "kind": "youtube#playlistItem",
                "id": "UExJVEVN",
                "snippet": {
                    "publishedAt": "2024-03-02T08:00:00Z",
                    "title": "SongY",
                    "description": "Official video",
                    "channelTitle": "ChanX",
                    "playlistId": "PL123",
                    "position": 0,
                    "resourceId": {"kind": "youtube#video", "videoId": "abc123"},
                    "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/abc123/default.jpg"}},
                },
            }
        ],
    }
