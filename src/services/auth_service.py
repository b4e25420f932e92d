"""Auth service: exposes YouTube token acquisition to the web layer."""

import logging

from src.errors import BadRequestError, InternalServerError
from src.web.models import AuthResponse
from src.youtube.oauth import (
    CodeExchangeError,
    CredentialsFileError,
    OAuthError,
    TokenManager,
    TokenRefreshError,
    TokenStoreError,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Successfully authenticated with YouTube"


class AuthService:
    """Wraps TokenManager and converts its failures into API errors."""

    def __init__(self, token_manager: TokenManager):
        self.token_manager = token_manager

    def get_auth_url(self) -> str:
        try:
            return self.token_manager.authorization_url()
        except CredentialsFileError as e:
            raise InternalServerError("Unable to read credentials file", cause=e) from e

    def complete_auth(self, auth_code: str) -> AuthResponse:
        """Exchange an authorization code from the web callback."""
        if not auth_code or not auth_code.strip():
            raise BadRequestError("Authorization code is required")

        try:
            credentials = self.token_manager.exchange_code(auth_code.strip())
        except CredentialsFileError as e:
            raise InternalServerError("Unable to read credentials file", cause=e) from e
        except CodeExchangeError as e:
            logger.warning(f"Authorization code exchange failed: {e}")
            raise BadRequestError("Invalid authorization code", cause=e) from e
        except TokenStoreError as e:
            raise InternalServerError("Unable to save token", cause=e) from e

        logger.info("Completed YouTube authorization via callback")
        return AuthResponse(success=True, access_token=credentials.token, message=SUCCESS_MESSAGE)

    def authenticate(self, interactive: bool = True) -> AuthResponse:
        """Authenticate from the cached token, falling back to the console flow."""
        try:
            access_token = self.token_manager.get_access_token(interactive=interactive)
        except CredentialsFileError as e:
            raise InternalServerError("Unable to read credentials file", cause=e) from e
        except TokenRefreshError as e:
            logger.error(f"Token refresh rejected: {e}")
            raise InternalServerError("Failed to refresh YouTube token", cause=e) from e
        except TokenStoreError as e:
            raise InternalServerError("Unable to save token", cause=e) from e
        except OAuthError as e:
            raise InternalServerError("Failed to authenticate with YouTube", cause=e) from e

        return AuthResponse(success=True, access_token=access_token, message=SUCCESS_MESSAGE)
