"""API route for exporting a playlist as JSON, CSV or M3U."""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from src.errors import BadRequestError
from src.services.export_service import ExportService
from src.web.auth import get_access_token
from src.web.models import ExportRequest, ExportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"])


@router.post("/{playlist_id}", response_model=ExportResponse)
async def export_playlist(
    request: Request,
    playlist_id: str,
    body: Optional[ExportRequest] = Body(default=None),
    access_token: str = Depends(get_access_token),
):
    """
    Export a playlist.

    The format defaults to json. The exported text is returned in `data`.
    """
    if not playlist_id or not playlist_id.strip():
        raise BadRequestError("Playlist ID is required")

    export_service: ExportService = request.app.state.export_service
    return await asyncio.to_thread(
        export_service.export_playlist,
        access_token,
        playlist_id.strip(),
        body or ExportRequest(),
    )
