"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_QR_URL = "https://fish-gao.github.io"


class CardSettings(BaseSettings):
    """Share card settings."""

    model_config = SettingsConfigDict(env_prefix="LINGQIAN_CARD_", extra="ignore")

    # Target of the QR inset on every card
    qr_url: str = DEFAULT_QR_URL

    # Extra directories searched for font files before the system paths
    font_dirs: list[Path] = Field(default_factory=list)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LINGQIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Active language for signs and UI labels
    language: Literal["zh", "en"] = "zh"
    default_language: Literal["zh", "en"] = "zh"

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "data")
    lang_dir: Path = Field(default_factory=lambda: Path.cwd() / "lang")
    output_dir: Path = Field(default_factory=lambda: Path.cwd() / "cards")

    card: CardSettings = Field(default_factory=CardSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
