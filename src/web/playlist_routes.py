"""API routes for reading the authenticated user's playlists."""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from src.errors import BadRequestError
from src.services.playlist_service import PlaylistService
from src.web.auth import get_access_token
from src.web.models import (
    PlaylistDetailResponse,
    PlaylistSongsResponse,
    PlaylistsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/playlists", tags=["playlists"])

DEFAULT_MAX_RESULTS = 25
MAX_RESULTS_LIMIT = 50
DEFAULT_SONGS_MAX_RESULTS = 50


def parse_max_results(value: Optional[str], default: int, limit: Optional[int] = None) -> int:
    """Parse a max_results query value, using the default when absent or out of range."""
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    if parsed <= 0 or (limit is not None and parsed > limit):
        return default
    return parsed


def _require_playlist_id(playlist_id: str) -> str:
    if not playlist_id or not playlist_id.strip():
        raise BadRequestError("Playlist ID is required")
    return playlist_id.strip()


@router.get("", response_model=PlaylistsResponse, response_model_exclude_none=True)
async def list_playlists(
    request: Request,
    max_results: Optional[str] = None,
    page_token: Optional[str] = None,
    access_token: str = Depends(get_access_token),
):
    """
    List the user's playlists, one upstream page at a time.

    Args:
        max_results: Page size, 1-50 (default 25)
        page_token: next_page_token or prev_page_token from a previous response
    """
    playlist_service: PlaylistService = request.app.state.playlist_service
    return await asyncio.to_thread(
        playlist_service.get_playlists,
        access_token,
        parse_max_results(max_results, DEFAULT_MAX_RESULTS, MAX_RESULTS_LIMIT),
        page_token or None,
    )


@router.get("/{playlist_id}", response_model=PlaylistDetailResponse)
async def get_playlist(
    request: Request,
    playlist_id: str,
    access_token: str = Depends(get_access_token),
):
    """Get a playlist with its videos."""
    playlist_service: PlaylistService = request.app.state.playlist_service
    return await asyncio.to_thread(
        playlist_service.get_playlist, access_token, _require_playlist_id(playlist_id)
    )


@router.get("/{playlist_id}/songs", response_model=PlaylistSongsResponse)
async def get_playlist_songs(
    request: Request,
    playlist_id: str,
    max_results: Optional[str] = None,
    access_token: str = Depends(get_access_token),
):
    """Get only the videos of a playlist."""
    playlist_service: PlaylistService = request.app.state.playlist_service
    playlist_id = _require_playlist_id(playlist_id)

    videos = await asyncio.to_thread(
        playlist_service.get_playlist_songs,
        access_token,
        playlist_id,
        parse_max_results(max_results, DEFAULT_SONGS_MAX_RESULTS),
    )
    return PlaylistSongsResponse(playlist_id=playlist_id, videos=videos, count=len(videos))
