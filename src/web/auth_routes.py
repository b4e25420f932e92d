"""
Authentication routes for the YouTube OAuth 2.0 flow.

Provides endpoints for:
- /auth/youtube/url - Consent URL the user visits to obtain a code
- /auth/youtube/callback - Exchange a code delivered by the user's browser
- /auth/youtube - Use the cached token, or run the console flow on the server
"""

import asyncio
import logging

from fastapi import APIRouter, Request

from src.services.auth_service import AuthService
from src.web.models import AuthCallbackRequest, AuthResponse, AuthURLResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/youtube/url", response_model=AuthURLResponse)
async def get_youtube_auth_url(request: Request):
    """
    Get the YouTube consent URL.

    After consenting, Google shows an authorization code which is sent to
    /auth/youtube/callback.
    """
    auth_service: AuthService = request.app.state.auth_service
    auth_url = await asyncio.to_thread(auth_service.get_auth_url)

    return AuthURLResponse(
        auth_url=auth_url,
        message="Visit this URL to authorize the application, then send the code to /auth/youtube/callback",
    )


@router.post("/youtube/callback", response_model=AuthResponse, response_model_exclude_none=True)
async def complete_youtube_auth(request: Request, body: AuthCallbackRequest):
    """
    Complete authentication with an authorization code.

    Exchanges the code for a token and persists it to the token file.
    """
    auth_service: AuthService = request.app.state.auth_service
    return await asyncio.to_thread(auth_service.complete_auth, body.auth_code)


@router.post("/youtube", response_model=AuthResponse, response_model_exclude_none=True)
async def authenticate_youtube(request: Request):
    """
    Authenticate with the cached token file.

    Refreshes an expired token. Without a usable token, the server prompts
    on its console for an authorization code.
    """
    auth_service: AuthService = request.app.state.auth_service
    return await asyncio.to_thread(auth_service.authenticate)
