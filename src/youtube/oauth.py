"""
OAuth2 credential handling for the YouTube Data API.

Provides:
- Loading the OAuth client registration ("installed" app JSON)
- A token store persisting the user's token to a JSON file
- Token providers for the three ways of obtaining a token:
  cached file (with refresh), interactive console code, web callback code
- TokenManager, the entry point used by the auth service
"""

import json
import logging
import os
import tempfile
import threading
import webbrowser
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from src.config import YOUTUBE_READONLY_SCOPE

logger = logging.getLogger(__name__)

OAUTH_STATE = "state-token"

# Serializes token file replacement within this process
_token_file_lock = threading.Lock()


class OAuthError(Exception):
    """Base class for credential and token failures."""


class CredentialsFileError(OAuthError):
    """The OAuth client credentials file is unreadable or malformed."""


class TokenStoreError(OAuthError):
    """The token file could not be read or written."""


class TokenNotFoundError(OAuthError):
    """No usable cached token exists."""


class TokenRefreshError(OAuthError):
    """The token endpoint rejected a refresh."""


class CodeExchangeError(OAuthError):
    """An authorization code could not be exchanged for a token."""


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth2 client registration for an installed application."""

    client_id: str
    client_secret: str
    auth_uri: str
    token_uri: str
    redirect_uris: tuple[str, ...]

    @property
    def redirect_uri(self) -> str:
        return self.redirect_uris[0]

    def to_client_config(self) -> dict:
        """Return the client config document expected by google-auth-oauthlib."""
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
                "redirect_uris": list(self.redirect_uris),
            }
        }


def load_client_credentials(path: str) -> ClientCredentials:
    """
    Read the OAuth client credentials file.

    Accepts the "installed" shape downloaded from the Google Cloud console,
    and the "web" shape as a fallback.

    Raises:
        CredentialsFileError: If the file cannot be read, parsed, or lacks
            required fields.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise CredentialsFileError(f"Unable to read client secret file {path}: {e}") from e
    except ValueError as e:
        raise CredentialsFileError(f"Unable to parse client secret file {path}: {e}") from e

    if not isinstance(document, dict):
        raise CredentialsFileError(f"Client secret file {path} is not a JSON object")

    section = document.get("installed") or document.get("web")
    if not isinstance(section, dict):
        raise CredentialsFileError(
            f"Client secret file {path} has no 'installed' or 'web' section"
        )

    missing = [
        key for key in ("client_id", "client_secret", "auth_uri", "token_uri")
        if not section.get(key)
    ]
    if missing:
        raise CredentialsFileError(
            f"Client secret file {path} is missing: {', '.join(missing)}"
        )

    redirect_uris = tuple(section.get("redirect_uris") or ())
    if not redirect_uris:
        raise CredentialsFileError(f"Client secret file {path} has no redirect_uris")

    return ClientCredentials(
        client_id=section["client_id"],
        client_secret=section["client_secret"],
        auth_uri=section["auth_uri"],
        token_uri=section["token_uri"],
        redirect_uris=redirect_uris,
    )


def _format_expiry(expiry: Optional[datetime]) -> Optional[str]:
    # google-auth keeps expiry as naive UTC
    if expiry is None:
        return None
    if expiry.tzinfo is not None:
        expiry = expiry.astimezone(timezone.utc).replace(tzinfo=None)
    return expiry.replace(microsecond=0).isoformat() + "Z"


def _parse_expiry(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class TokenStore:
    """
    JSON file holding the user's OAuth2 token.

    The file is the only state shared between requests and process runs.
    Writes go to a temporary file in the same directory which then replaces
    the token file, so readers never observe a truncated document.
    """

    def __init__(self, path: str):
        self.path = path

    def load(
        self,
        client: Optional[ClientCredentials] = None,
        scopes: Optional[list[str]] = None,
    ) -> Optional[Credentials]:
        """
        Load the cached token.

        Args:
            client: Client registration attached to the credentials so they
                can be refreshed.
            scopes: Scopes the token was granted for.

        Returns:
            Credentials, or None when no token file exists.

        Raises:
            TokenStoreError: If the file exists but is unreadable or malformed.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise TokenStoreError(f"Unable to read token file {self.path}: {e}") from e
        except ValueError as e:
            raise TokenStoreError(f"Unable to parse token file {self.path}: {e}") from e

        if not isinstance(data, dict) or not data.get("access_token"):
            raise TokenStoreError(f"Token file {self.path} has no access_token")

        try:
            expiry = _parse_expiry(data.get("expiry"))
        except ValueError as e:
            raise TokenStoreError(f"Token file {self.path} has an invalid expiry: {e}") from e

        return Credentials(
            token=data["access_token"],
            refresh_token=data.get("refresh_token") or None,
            token_uri=client.token_uri if client else None,
            client_id=client.client_id if client else None,
            client_secret=client.client_secret if client else None,
            scopes=scopes,
            expiry=expiry,
        )

    def save(self, credentials: Credentials) -> None:
        """
        Persist credentials, replacing the token file wholesale.

        Raises:
            TokenStoreError: If the file cannot be written.
        """
        data = {
            "access_token": credentials.token,
            "token_type": "Bearer",
            "refresh_token": credentials.refresh_token,
            "expiry": _format_expiry(credentials.expiry),
        }
        directory = os.path.dirname(os.path.abspath(self.path))

        with _token_file_lock:
            tmp_path = None
            try:
                fd, tmp_path = tempfile.mkstemp(
                    prefix=".token-", suffix=".tmp", dir=directory
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
                tmp_path = None
            except OSError as e:
                raise TokenStoreError(f"Unable to cache oauth token to {self.path}: {e}") from e
            finally:
                if tmp_path and os.path.exists(tmp_path):
                    os.remove(tmp_path)

        logger.info(f"Saved OAuth token to {self.path}")


def build_flow(client: ClientCredentials, scopes: Optional[list[str]] = None) -> Flow:
    """Create an authorization-code flow for the client registration."""
    return Flow.from_client_config(
        client.to_client_config(),
        scopes=scopes or [YOUTUBE_READONLY_SCOPE],
        redirect_uri=client.redirect_uri,
        # The callback exchange happens on a different flow instance
        autogenerate_code_verifier=False,
    )


def authorization_url(flow: Flow) -> str:
    url, _ = flow.authorization_url(access_type="offline", state=OAUTH_STATE)
    return url


def exchange_code(flow: Flow, code: str) -> Credentials:
    """
    Exchange an authorization code for credentials.

    Raises:
        CodeExchangeError: If the token endpoint rejects the code or cannot be reached.
    """
    try:
        flow.fetch_token(code=code)
    except (OAuth2Error, requests.exceptions.RequestException, ValueError, Warning) as e:
        raise CodeExchangeError(f"Unable to retrieve token from web: {e}") from e
    return flow.credentials


class TokenProvider(ABC):
    """Strategy for obtaining valid user credentials."""

    def __init__(
        self,
        client: ClientCredentials,
        store: TokenStore,
        scopes: Optional[list[str]] = None,
    ):
        self.client = client
        self.store = store
        self.scopes = scopes or [YOUTUBE_READONLY_SCOPE]

    @abstractmethod
    def get_credentials(self) -> Credentials:
        """Return credentials holding a usable access token."""


class FileCachedTokenProvider(TokenProvider):
    """Serve the cached token, refreshing it when expired."""

    def get_credentials(self) -> Credentials:
        try:
            credentials = self.store.load(self.client, self.scopes)
        except TokenStoreError as e:
            logger.warning(f"Ignoring unusable token file: {e}")
            raise TokenNotFoundError(str(e)) from e

        if credentials is None:
            raise TokenNotFoundError(f"No token file at {self.store.path}")

        if credentials.valid:
            logger.debug("Using existing token")
            return credentials

        if not credentials.refresh_token:
            raise TokenNotFoundError("Cached token expired and has no refresh token")

        logger.info("Token expired, refreshing")
        try:
            credentials.refresh(Request())
        except GoogleAuthError as e:
            raise TokenRefreshError(f"Unable to refresh token: {e}") from e

        self.store.save(credentials)
        return credentials


class CallbackCodeTokenProvider(TokenProvider):
    """Exchange an authorization code delivered to the web callback."""

    def __init__(self, client, store, code: str, scopes=None):
        super().__init__(client, store, scopes)
        self.code = code

    def get_credentials(self) -> Credentials:
        flow = build_flow(self.client, self.scopes)
        credentials = exchange_code(flow, self.code)
        self.store.save(credentials)
        return credentials


def open_browser(url: str) -> bool:
    """Best-effort launch of the system browser; failures are only logged."""
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning(f"Could not open browser automatically: {e}")
        return False
    if not opened:
        logger.warning("Could not open browser automatically")
    return opened


class InteractiveCodeTokenProvider(TokenProvider):
    """Ask the operator to authorize in a browser and paste the code."""

    def __init__(
        self,
        client,
        store,
        scopes=None,
        prompt: Callable[[str], str] = input,
        launch_browser: Callable[[str], bool] = open_browser,
    ):
        super().__init__(client, store, scopes)
        self.prompt = prompt
        self.launch_browser = launch_browser

    def get_credentials(self) -> Credentials:
        flow = build_flow(self.client, self.scopes)
        url = authorization_url(flow)

        print("Go to the following link in your browser:")
        print(f"  {url}")
        self.launch_browser(url)

        try:
            code = self.prompt("Enter the authorization code: ").strip()
        except EOFError as e:
            raise CodeExchangeError("Unable to read authorization code") from e
        if not code:
            raise CodeExchangeError("No authorization code provided")

        credentials = exchange_code(flow, code)
        self.store.save(credentials)
        return credentials


class TokenManager:
    """
    Entry point for YouTube credential acquisition.

    The client credentials file is read once per operation.
    """

    def __init__(
        self,
        credentials_file: str,
        token_file: str,
        scopes: Optional[list[str]] = None,
        prompt: Callable[[str], str] = input,
        launch_browser: Callable[[str], bool] = open_browser,
    ):
        self.credentials_file = credentials_file
        self.store = TokenStore(token_file)
        self.scopes = scopes or [YOUTUBE_READONLY_SCOPE]
        self.prompt = prompt
        self.launch_browser = launch_browser

    def load_client(self) -> ClientCredentials:
        return load_client_credentials(self.credentials_file)

    def authorization_url(self) -> str:
        """Build the consent URL a user visits to obtain an authorization code."""
        flow = build_flow(self.load_client(), self.scopes)
        return authorization_url(flow)

    def exchange_code(self, code: str) -> Credentials:
        """Exchange a web-delivered authorization code and persist the token."""
        provider = CallbackCodeTokenProvider(
            self.load_client(), self.store, code, self.scopes
        )
        return provider.get_credentials()

    def get_credentials(self, interactive: bool = True) -> Credentials:
        """
        Return valid credentials from the token file, refreshing when expired.

        Falls back to the interactive console flow when no usable token is
        cached and `interactive` is set.
        """
        client = self.load_client()
        try:
            return FileCachedTokenProvider(client, self.store, self.scopes).get_credentials()
        except TokenNotFoundError as e:
            if not interactive:
                raise
            logger.info(f"No usable cached token ({e}), starting interactive authorization")

        provider = InteractiveCodeTokenProvider(
            client,
            self.store,
            self.scopes,
            prompt=self.prompt,
            launch_browser=self.launch_browser,
        )
        return provider.get_credentials()

    def get_access_token(self, interactive: bool = True) -> str:
        return self.get_credentials(interactive=interactive).token

    @staticmethod
    def validate_token(access_token: Optional[str]) -> bool:
        """Cheap local check that a bearer token is present."""
        return bool(access_token and access_token.strip())
