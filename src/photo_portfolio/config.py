"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from photo_portfolio.domain.staging import (
    BYTES_PER_MB,
    DEFAULT_ACCEPTED_FORMATS,
    StagingConfig,
)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    max_files: int = 50
    max_size_mb: float = 10
    accepted_formats: str = ",".join(sorted(DEFAULT_ACCEPTED_FORMATS))
    preview_url_prefix: str = "blob:photo-portfolio"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def staging_config(self) -> StagingConfig:
        """Build the validation limits used by the photo store."""
        return StagingConfig(
            max_files=self.max_files,
            max_size_bytes=int(self.max_size_mb * BYTES_PER_MB),
            accepted_mime_prefixes=parse_accepted_formats(self.accepted_formats),
        )


def parse_accepted_formats(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated list of MIME types, falling back to defaults."""
    if raw is None:
        return DEFAULT_ACCEPTED_FORMATS
    formats = {chunk.strip().lower() for chunk in raw.split(",")}
    formats.discard("")
    return frozenset(formats) or DEFAULT_ACCEPTED_FORMATS
