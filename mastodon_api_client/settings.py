"""Client settings loaded from environment variables and .env file."""

from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidInstanceURL


class Settings(BaseSettings):
    """Settings for connecting to a Mastodon instance."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mastodon_instance_url: str | None = None
    mastodon_access_token: str | None = None
    mastodon_timeout: float = 30.0
    mastodon_user_agent: str = "mastodon-api-client"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def normalize_instance_url(text: str) -> str:
    """Turn free-form instance input into a base URL.

    "mastodon.social", "https://mastodon.social/" and " mastodon.social "
    all become "https://mastodon.social".
    """
    text = (text or "").strip()
    if not text:
        raise InvalidInstanceURL("Instance URL is empty")
    if "://" not in text:
        text = f"https://{text}"

    try:
        url = httpx.URL(text)
    except httpx.InvalidURL as e:
        raise InvalidInstanceURL(f"Invalid instance URL: {text}") from e

    if url.scheme not in ("http", "https"):
        raise InvalidInstanceURL(f"Unsupported scheme: {url.scheme}")
    if not url.host:
        raise InvalidInstanceURL(f"Instance URL has no host: {text}")

    netloc = url.netloc.decode("ascii")
    return f"{url.scheme}://{netloc}{url.path}".rstrip("/")
