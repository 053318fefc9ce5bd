"""Configuration management for exline."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXLINE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: str = Field(default="default", description="Log profile (default or repl)")

    # Command Configuration
    shell_command: str = Field(default="/bin/sh -c", description="Argv prefix used by :shellcmd")
    home_dir: Optional[Path] = Field(None, description="Home directory used for ~/ expansion")

    # Session Configuration
    history_max_items: int = Field(default=500, description="Maximum entries kept per history kind")
    start_uri: Optional[str] = Field(None, description="Resource loaded when the repl starts")

    def resolved_home(self) -> str:
        return str(self.home_dir or Path.home())


def get_settings(**overrides: object) -> Settings:
    """Get application settings.

    Args:
        overrides: Field values taking precedence over environment and .env

    Returns:
        Settings instance
    """
    settings = Settings(**overrides)  # type: ignore[arg-type]

    profile = "repl" if settings.log_profile == "repl" else "default"
    configure_logging(profile=profile, level=settings.log_level)

    return settings
