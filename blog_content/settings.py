from datetime import timedelta
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    POSTS_DIR: str = "src/content/blog"

    # Site
    SITE_WEBSITE: str = "https://drunkcoding.net/"
    SITE_TIMEZONE: str = "Asia/Bangkok"  # IANA name, applied to naive dates

    # Listings
    POST_PER_INDEX: int = 5  # recent posts on the home page
    POST_PER_PAGE: int = 10
    SCHEDULED_POST_MARGIN_MINUTES: int = 15
    SHOW_SCHEDULED: bool = False  # dev builds list future posts too

    # Logging
    LOG_LEVEL: str = "INFO"

    # Preview API key
    PREVIEW_API_KEY: str = ""

    @property
    def scheduled_post_margin(self) -> timedelta:
        return timedelta(minutes=self.SCHEDULED_POST_MARGIN_MINUTES)

    def post_url(self, slug: str) -> str:
        return f"{self.SITE_WEBSITE.rstrip('/')}/posts/{slug}/"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
