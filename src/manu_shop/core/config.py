"""
Configuration management for Manu-shop.

This module handles loading of environment variables (and an optional
``.env`` file), credentials for the hosted database and the LLM provider,
and general application settings.
"""

import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

import dotenv
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import LOW_STOCK_THRESHOLD

# Configure logging
logger = logging.getLogger(__name__)

# Load .env file if it exists
dotenv.load_dotenv()


class SessionKeys:
    """Streamlit session state keys."""
    CURRENT_PAGE = "current_page"
    CART = "cart"
    PRODUCT_FORM = "product_form"
    EDITING_ID = "editing_id"
    IS_ADDING = "is_adding"
    NOTIFICATIONS = "notifications"
    NOTIFICATION_FEED = "notification_feed"
    ASSISTANT_CHAT = "assistant_chat"
    FLOATING_CHAT = "floating_chat"
    FLOATING_MINIMIZED = "floating_minimized"
    FLOATING_HEIGHT = "floating_height"
    CONFIRM_DELETE_ID = "confirm_delete_id"
    FLASH = "flash"
    CORRELATION_ID = "correlation_id"


class EnvironmentType(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Standard log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SupabaseSettings(BaseSettings):
    """Hosted database (Supabase) connection settings."""
    url: Optional[str] = None
    key: Optional[SecretStr] = None

    model_config = SettingsConfigDict(env_prefix="SUPABASE_", case_sensitive=False, extra="ignore")

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key and self.key.get_secret_value())


class LLMSettings(BaseSettings):
    """Chat-completion provider settings (OpenRouter, OpenAI-compatible)."""
    api_key: Optional[SecretStr] = Field(None, validation_alias="OPENROUTER_API_KEY")
    base_url: str = Field("https://openrouter.ai/api/v1", validation_alias="OPENROUTER_BASE_URL")
    model: str = Field("google/gemini-2.5-flash-lite", validation_alias="AI_MODEL")
    temperature: Optional[float] = Field(None, validation_alias="AI_TEMPERATURE")
    timeout_seconds: float = Field(60.0, validation_alias="AI_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore", populate_by_name=True)

    def get_client_config(self) -> dict:
        """Keyword arguments for ``openai.OpenAI``."""
        return {
            "api_key": self.api_key.get_secret_value() if self.api_key else None,
            "base_url": self.base_url,
            "timeout": self.timeout_seconds,
        }

    def get_completion_config(self) -> dict:
        """Keyword arguments for ``chat.completions.create``."""
        config = {"model": self.model}
        if self.temperature is not None:
            config["temperature"] = self.temperature
        return config


class ApplicationSettings(BaseSettings):
    """General application settings."""
    environment: EnvironmentType = EnvironmentType.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    sentry_dsn: Optional[str] = None
    dashboard_live_history: bool = False

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class Settings(BaseSettings):
    """Main application settings container."""
    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        try:
            return cls()
        except Exception as e:
            logger.error(f"Failed to load configuration: {str(e)}")
            raise


def get_project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent.parent.parent


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the application settings."""
    return Settings.from_env()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
