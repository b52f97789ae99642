from urllib.parse import urlparse

from pydantic_settings import BaseSettings

DEFAULT_DATABASE_NAME = "reel_northeast"


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = []
    frontend_url: str = ""  # URL of the frontend application, added to CORS origins when set

    model_config = {
        "env_file": [".env"],
        "env_prefix": "REELFORUM_",
        "extra": "ignore",
    }

    @property
    def database_name(self) -> str:
        """Database named in the URL path, e.g. mongodb://host/forum -> forum."""
        return urlparse(self.database_url).path.lstrip("/") or DEFAULT_DATABASE_NAME

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins including the frontend URL."""
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins
