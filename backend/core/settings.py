"""
Centralized application settings using Pydantic BaseSettings.

This module provides type-safe access to environment variables with validation.
All settings are loaded once at application startup.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

# ============================================================================
# Application Constants
# ============================================================================

# Substituted for empty or whitespace-only replies so a blank turn is never published
FALLBACK_REPLY_TEXT = "I'm still processing that. I agree with the points made."

# Synthetic user turn injected between auto-continue sweeps
CONTINUATION_PROMPT = "Continue the discussion and debate each other's points."

# Informational marker left in the history after a reset
CLEAR_MARKER_TEXT = "Discussion cleared. The table is yours."

# Shown when the user stops an auto-continue chain
STOP_NOTICE_TEXT = "Auto-Pilot stopped by user."

# Shown in place of a reply when a provider call fails (never persisted)
PROVIDER_ERROR_NOTICE = "*System Error: Failed to connect.*"

# Used when roundtable.yaml does not define a persona prompt
DEFAULT_PERSONA_PROMPT = (
    "You are {name}, an AI assistant. You are participating in a group chat with a User and other AIs. "
    "Keep your responses relatively concise, conversational, and stay in character. "
    "Speak naturally as your specific AI persona. Do not write responses or dialogues on behalf of other AIs."
)

# Key under which the remote credential is persisted
CREDENTIAL_STORAGE_KEY = "openrouter_api_key"


def _get_backend_dir() -> Path:
    return Path(__file__).parent.parent  # backend/core -> backend


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults and are validated on startup.
    """

    # Remote provider
    openrouter_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_api_key: Optional[str] = None
    remote_max_tokens: int = 300
    remote_timeout_seconds: float = 60.0
    app_title: str = "AI Group Chat"
    app_referer: Optional[str] = None

    # Mock provider
    mock_latency_seconds: float = 1.5

    # Pacing (seconds)
    reading_delay_per_char: float = 0.01
    min_reading_delay: float = 1.0
    max_reading_delay: float = 3.0
    failure_delay: float = 1.5
    continue_delay: float = 1.0

    # Roundtable behaviour
    auto_continue: bool = False
    event_buffer_size: int = 500

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./roundtable.db"

    # CORS configuration
    frontend_url: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    # Optional override for roundtable.yaml
    roundtable_config_file: Optional[str] = None

    @field_validator("auto_continue", mode="before")
    @classmethod
    def validate_auto_continue(cls, v: Optional[str]) -> bool:
        """Parse auto_continue from string to bool."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() == "true"
        return False

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> str:
        """Normalize LOG_LEVEL, falling back to INFO for unknown values."""
        if not v:
            return "INFO"
        v_upper = v.upper()
        if v_upper in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return v_upper
        import logging

        logging.warning(f"Invalid LOG_LEVEL value: {v}. Defaulting to INFO.")
        return "INFO"

    @field_validator(
        "reading_delay_per_char",
        "min_reading_delay",
        "max_reading_delay",
        "failure_delay",
        "continue_delay",
        "mock_latency_seconds",
    )
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("delays must be non-negative")
        return v

    @model_validator(mode="after")
    def validate_reading_delay_bounds(self) -> "Settings":
        if self.min_reading_delay > self.max_reading_delay:
            raise ValueError(
                f"min_reading_delay ({self.min_reading_delay}) must not exceed max_reading_delay ({self.max_reading_delay})"
            )
        return self

    @property
    def backend_dir(self) -> Path:
        """
        Get the backend directory.

        Returns:
            Path to the backend directory
        """
        return _get_backend_dir()

    @property
    def config_dir(self) -> Path:
        """
        Get the configuration files directory.

        Returns:
            Path to backend/config
        """
        return self.backend_dir / "config"

    @property
    def roundtable_config_path(self) -> Path:
        """
        Get the path to the roundtable YAML file.

        Returns:
            ROUNDTABLE_CONFIG_FILE if set, otherwise backend/config/roundtable.yaml
        """
        if self.roundtable_config_file:
            return Path(self.roundtable_config_file)
        return self.config_dir / "roundtable.yaml"

    def get_cors_origins(self) -> List[str]:
        """
        Get the list of allowed CORS origins.

        Returns:
            List of allowed origin URLs
        """
        origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]

        # Add custom frontend URL if provided
        if self.frontend_url:
            origins.append(self.frontend_url)

        return origins

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        # Allow extra fields for forward compatibility
        extra = "ignore"


# Singleton instance - load settings once at first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (useful for testing).
    """
    global _settings
    _settings = None
