import os

from dotenv import load_dotenv

YOUTUBE_READONLY_SCOPE = "https://www.googleapis.com/auth/youtube.readonly"


def _getenv(key, default):
    """Return the environment value for key, treating empty strings as unset."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


class Config:
    def __init__(self, env_file=None):
        """
        Initialize configuration by loading environment variables and setting default attributes.

        Loads environment variables from the provided .env file path when `env_file` is given;
        otherwise loads from the default environment. Empty values fall back to defaults.

        Parameters:
            env_file (str | None): Optional path to a .env file to load environment variables from.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        # Server configuration
        self.HOST = _getenv("HOST", "0.0.0.0")
        self.PORT = int(_getenv("PORT", "8080"))
        self.ENVIRONMENT = _getenv("ENVIRONMENT", "development")
        self.APP_VERSION = _getenv("APP_VERSION", "1.0.0")
        self.LOG_LEVEL = _getenv("LOG_LEVEL", "INFO").upper()
        self.WEB_ALLOWED_ORIGINS = _getenv("ALLOWED_ORIGINS", "*")

        # Google OAuth client registration ("installed" app JSON) and cached token
        self.GOOGLE_CREDENTIALS_FILE = _getenv("GOOGLE_CREDENTIALS_FILE", "credentials.json")
        self.TOKEN_FILE = _getenv("TOKEN_FILE", "token.json")
        self.YOUTUBE_SCOPES = [YOUTUBE_READONLY_SCOPE]

        # Page size used when fetching a playlist's items for detail and export
        self.PLAYLIST_ITEMS_PAGE_SIZE = int(_getenv("PLAYLIST_ITEMS_PAGE_SIZE", "50"))

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        """Parse the comma separated ALLOWED_ORIGINS value."""
        if self.WEB_ALLOWED_ORIGINS == "*":
            return ["*"]
        return [o.strip() for o in self.WEB_ALLOWED_ORIGINS.split(",") if o.strip()]
