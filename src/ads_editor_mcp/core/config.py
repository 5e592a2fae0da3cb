"""Configuration management for the Ads Editor export service."""

import json
import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ads_editor_mcp.core.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogFormat(str, Enum):
    """Log format options."""

    JSON = "json"
    TEXT = "text"


class ExportConfig(BaseModel):
    """Defaults applied to rows when the campaign data leaves them blank."""

    default_budget: str = Field(default="100", description="Daily budget")
    default_budget_type: str = Field(default="Daily")
    default_bid_strategy: str = Field(default="Manual CPC")
    default_max_cpc: str = Field(default="1.00", description="Ad group max CPC")
    language: str = Field(default="en", description="Campaign language code")
    networks: str = Field(default="Google search")
    eu_political_ads: str = Field(default="No")
    desktop_bid_adjustment: str = Field(default="-100%")
    mobile_bid_adjustment: str = Field(default="0%")
    tablet_bid_adjustment: str = Field(default="-100%")

    keyword_campaign_name: str = Field(default="Keyword Campaign")
    keyword_ad_group_name: str = Field(default="All Keywords")
    negative_campaign_name: str = Field(default="Negative Keywords Campaign")
    negative_ad_group_name: str = Field(default="All Ad Groups")
    output_filename: str = Field(default="google_ads_export.csv")

    @field_validator("default_budget", "default_max_cpc")
    @classmethod
    def validate_numeric_default(cls, v: str) -> str:
        """Defaults end up in numeric columns, so they must parse."""
        try:
            float(v)
        except ValueError:
            raise ValueError(f"Expected a numeric string, got '{v}'")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: LogFormat = LogFormat.TEXT
    log_file: Path | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """Application settings.

    Environment Variables:
        ADS_EDITOR_ENVIRONMENT=development
        ADS_EDITOR_DEBUG=false
        ADS_EDITOR_EXPORT__DEFAULT_BUDGET=100
        ADS_EDITOR_EXPORT__DEFAULT_MAX_CPC=1.00
        ADS_EDITOR_EXPORT__LANGUAGE=en
        ADS_EDITOR_LOGGING__LEVEL=INFO
        ADS_EDITOR_LOGGING__FORMAT=json
        ADS_EDITOR_LOGGING__LOG_FILE=logs/ads_editor.log
    """

    model_config = SettingsConfigDict(
        env_prefix="ADS_EDITOR_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "Settings":
        """Load settings from the environment, reading a .env file first."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Try to load .env from project root
            root_dir = Path(__file__).parent.parent.parent.parent
            env_path = root_dir / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        return cls()

    def to_public_dict(self) -> dict[str, Any]:
        """Settings summary safe to hand to clients."""
        return {
            "environment": Environment(self.environment).value,
            "debug": self.debug,
            "export": self.export.model_dump(),
            "logging": {
                "level": self.logging.level,
                "format": LogFormat(self.logging.format).value,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    try:
        return Settings.from_env()
    except ValidationError as e:
        logging.error(f"Configuration error: {e}")
        raise ConfigurationError(str(e)) from e


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper())

    if settings.logging.format == LogFormat.JSON:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if settings.logging.log_file:
        log_path = Path(settings.logging.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if (
        settings.environment == Environment.PRODUCTION
        and log_level <= logging.DEBUG
    ):
        root_logger.warning(
            "DEBUG logging enabled in production environment. "
            "Set ADS_EDITOR_LOGGING__LEVEL to INFO or higher."
        )

