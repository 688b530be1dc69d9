"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INTERNAL_LOADER_PATTERN = (
    r"next-(app|middleware|client-pages|flight-(client|server|client-entry))-loader\.js"
)


class Settings(BaseSettings):
    """Configuration for bundlediag.

    Values are read from ``BUNDLEDIAG_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLEDIAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    color: bool = True

    # Rendering
    docs_url: str = "https://nextjs.org/docs/messages/module-not-found"
    internal_loader_pattern: str = DEFAULT_INTERNAL_LOADER_PATTERN

    # Page paths reported for image errors
    private_pages_prefix: str = "private-next-pages"
    public_pages_prefix: str = "./pages"
