"""Configuration management for lexical_render."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Deepest nesting the renderer will ever walk; keeps recursion well inside
# the interpreter limit
MAX_DEPTH_CEILING = 100

FALLBACK_MODES = ("message", "raw")


class Settings(BaseSettings):
    """Renderer configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Hardening limits
    max_depth: int = Field(
        default=64,
        ge=1,
        le=MAX_DEPTH_CEILING,
        alias="LEXICAL_RENDER_MAX_DEPTH",
    )
    max_nodes: int = Field(
        default=10_000,
        ge=1,
        alias="LEXICAL_RENDER_MAX_NODES",
    )

    # Document-fatal fallback
    fallback_message: str = Field(
        default="Error loading content",
        alias="LEXICAL_RENDER_FALLBACK_MESSAGE",
    )
    # "raw" shows the unparsed input as a paragraph instead of the message
    fallback_mode: Literal["message", "raw"] = Field(
        default="message",
        alias="LEXICAL_RENDER_FALLBACK_MODE",
    )

    # Emit an error node in place of a node that failed to render
    node_placeholders: bool = Field(
        default=False,
        alias="LEXICAL_RENDER_NODE_PLACEHOLDERS",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        alias="LEXICAL_RENDER_LOG_LEVEL",
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from an optional specific .env file."""
    global _settings
    if env_file:
        _settings = Settings(_env_file=env_file)
    else:
        _settings = Settings()
    return _settings
