"""Playlist export to JSON, CSV and M3U text formats."""

import csv
import io
import logging
from enum import Enum
from typing import Optional

from src.errors import BadRequestError
from src.services.playlist_service import PlaylistService
from src.web.models import ExportRequest, ExportResponse, PlaylistDetailResponse

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
ADDED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

CSV_HEADER = ["Position", "Title", "Channel", "Video ID"]
CSV_INFO_HEADER = CSV_HEADER + ["Description", "Added At"]


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    M3U = "m3u"


def resolve_format(value: Optional[str]) -> ExportFormat:
    """
    Map a requested format string to an ExportFormat.

    Empty or missing values mean JSON.

    Raises:
        BadRequestError: If the format is not supported.
    """
    if not value:
        return ExportFormat.JSON
    try:
        return ExportFormat(value)
    except ValueError:
        supported = ", ".join(f.value for f in ExportFormat)
        raise BadRequestError(
            f"Unsupported export format '{value}'. Supported formats: {supported}"
        ) from None


def export_json(playlist: PlaylistDetailResponse) -> str:
    return playlist.model_dump_json(indent=2)


def export_csv(playlist: PlaylistDetailResponse, include_info: bool = False) -> str:
    """Render one header row and one row per video."""
    buffer = io.StringIO()
    # QUOTE_MINIMAL: only fields holding a comma, quote or line break are quoted
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(CSV_INFO_HEADER if include_info else CSV_HEADER)
    for video in playlist.videos:
        row = [str(video.position + 1), video.title, video.channel_title, video.id]
        if include_info:
            row += [video.description, video.added_at.strftime(ADDED_AT_FORMAT)]
        writer.writerow(row)

    return buffer.getvalue()


def export_m3u(playlist: PlaylistDetailResponse) -> str:
    lines = ["#EXTM3U", f"#PLAYLIST:{playlist.title}"]
    for video in playlist.videos:
        lines.append(f"#EXTINF:-1,{video.channel_title} - {video.title}")
        lines.append(WATCH_URL.format(video_id=video.id))
    return "\n".join(lines) + "\n"


_RENDERERS = {
    ExportFormat.JSON: lambda playlist, include_info: export_json(playlist),
    ExportFormat.CSV: export_csv,
    ExportFormat.M3U: lambda playlist, include_info: export_m3u(playlist),
}


def render(
    playlist: PlaylistDetailResponse,
    export_format: Optional[str],
    include_info: bool = False,
) -> str:
    """Render a playlist in the requested format."""
    fmt = resolve_format(export_format)
    return _RENDERERS[fmt](playlist, include_info)


class ExportService:
    """Fetches a playlist and renders it in an export format."""

    def __init__(self, playlist_service: PlaylistService):
        self.playlist_service = playlist_service

    def export_playlist(
        self, access_token: str, playlist_id: str, request: ExportRequest
    ) -> ExportResponse:
        """
        Export a playlist.

        The format is validated before any upstream request is made.

        Raises:
            BadRequestError: For unsupported formats.
            NotFoundError: If the playlist does not exist.
            InternalServerError: For upstream failures.
        """
        fmt = resolve_format(request.format)
        playlist = self.playlist_service.get_playlist(access_token, playlist_id)

        data = render(playlist, fmt.value, request.include_info)
        logger.info(
            f"Exported playlist {playlist_id} as {fmt.value} ({len(playlist.videos)} videos)"
        )

        return ExportResponse(
            success=True,
            format=fmt.value,
            data=data,
            message=f"Successfully exported playlist '{playlist.title}' as {fmt.value}",
        )
