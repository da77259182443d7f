"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKCOLLECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Vault settings
    vault_path: Path | None = None
    root_paths: list[str] = Field(default_factory=lambda: [""])  # "" is the whole vault
    include_patterns: list[str] = Field(default_factory=lambda: ["**/*.md"])
    exclude_patterns: list[str] = Field(
        default_factory=lambda: [".obsidian/*", ".trash/*", ".git/*", "node_modules/*"]
    )

    # Collection settings
    debounce_seconds: float = 1.0
    old_task_days: int = 7


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
