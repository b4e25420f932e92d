"""
Pydantic models for web API request/response validation.

The playlist and video response models are also the schema of the JSON export.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Uniform error envelope."""
    error: str = Field(..., description="HTTP reason phrase")
    message: str = Field(..., description="Human-readable error message")
    code: int = Field(..., description="HTTP status code")


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


# --- Authentication Models ---


class AuthURLResponse(BaseModel):
    """Response model for the consent URL endpoint."""
    auth_url: str = Field(..., description="Google consent page URL")
    message: str = Field(..., description="Instructions for the user")


class AuthCallbackRequest(BaseModel):
    """Request model for completing authentication with an authorization code."""
    auth_code: str = Field(default="", max_length=2048, description="Authorization code from Google")


class AuthResponse(BaseModel):
    """Response model after a successful authentication."""
    success: bool
    access_token: Optional[str] = Field(default=None, description="OAuth2 access token for the /api endpoints")
    message: str


# --- Playlist Models ---


class VideoResponse(BaseModel):
    """A video in a playlist."""
    id: str = Field(..., description="YouTube video ID")
    title: str = ""
    description: str = ""
    channel_title: str = ""
    position: int = Field(default=0, description="Zero-based position within the playlist")
    added_at: datetime = Field(..., description="When the video was added to the playlist")
    thumbnail_url: str = ""


class PlaylistResponse(BaseModel):
    """Simplified playlist."""
    id: str = Field(..., description="YouTube playlist ID")
    title: str = ""
    description: str = ""
    video_count: int = 0
    privacy_status: str = ""
    created_at: datetime
    channel_title: str = ""
    thumbnail_url: str = ""


class PlaylistsResponse(BaseModel):
    """One page of the user's playlists."""
    playlists: List[PlaylistResponse] = Field(default_factory=list)
    total_count: int = 0
    next_page_token: Optional[str] = None
    prev_page_token: Optional[str] = None


class PlaylistDetailResponse(PlaylistResponse):
    """Playlist with its videos."""
    videos: List[VideoResponse] = Field(default_factory=list)


class PlaylistSongsResponse(BaseModel):
    """Videos of a playlist without the playlist metadata."""
    playlist_id: str
    videos: List[VideoResponse] = Field(default_factory=list)
    count: int = 0


# --- Export Models ---


class ExportRequest(BaseModel):
    """Request model for exporting a playlist."""
    format: Optional[str] = Field(default=None, description="Export format: json, csv or m3u (default json)")
    options: Dict[str, str] = Field(default_factory=dict, description="Format-specific options")
    include_info: bool = Field(default=False, description="Add description and added-at columns to CSV exports")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"format": "csv", "options": {}, "include_info": True}
        }
    )


class ExportResponse(BaseModel):
    """Response model for a playlist export."""
    success: bool
    format: str
    data: str = Field(..., description="Exported playlist contents")
    message: str
