"""Unified settings for content-sha256."""

import importlib.metadata
from typing import ClassVar, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_version(distribution: str) -> str:
    """Get version from installed package metadata."""
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


class Settings(BaseSettings):
    """Unified settings for the content-sha256 client layer."""

    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ClassVar to prevent Pydantic from trying to load from env
    API_NAME: ClassVar[str] = "content-sha256"
    API_VERSION: ClassVar[str] = get_version(API_NAME)

    # Multipart boundaries
    BOUNDARY_PREFIX: str = "-" * 24
    BOUNDARY_RANDOM_LENGTH: int = 13

    # Digest
    DIGEST_OFFLOAD_BYTES: int = 1024 * 1024

    # Transport
    REQUEST_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(env_prefix="CONTENT_HASH_", env_file=".env", env_file_encoding="utf-8")


settings = Settings()  # type: ignore
