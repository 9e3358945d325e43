# config.py

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from BLOG_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="BLOG_", env_file=".env", extra="ignore")

    app_name: str = "Blog API"
    version: str = "1.0.0"

    # Database (SQLite for simplicity)
    database_url: str = "sqlite+aiosqlite:///./blog.db"
    database_echo: bool = False  # Set True for SQL logging

    log_level: str = "INFO"

    # Pagination
    default_page_size: int = 5
    max_page_size: int = 100


@lru_cache
def get_settings() -> Settings:
    return Settings()
