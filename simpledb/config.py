"""Configuration management for SimpleDB."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplayConfig(BaseModel):
    """Result grid rendering."""

    min_column_width: int = Field(default=8, ge=1, le=256, description="Minimum grid column width")


class ReplConfig(BaseModel):
    """Interactive console configuration."""

    prompt: str = Field(default="simpledb> ", description="Input prompt")
    show_banner: bool = Field(default=True, description="Print the welcome banner on start")


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")


class Settings(BaseSettings):
    """Main configuration for SimpleDB."""

    model_config = SettingsConfigDict(
        env_prefix="SIMPLEDB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    repl: ReplConfig = Field(default_factory=ReplConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_settings() -> Settings:
    """Get the global settings instance."""
    return Settings()
