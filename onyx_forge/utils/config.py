"""Configuration management for Onyx Forge."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError
from .logger import get_logger, set_log_level

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = Path("config/models.yaml")


class ModelsConfig(BaseModel):
    """Provider model identifiers."""
    text: str = "gemini-2.5-flash"
    image: str = "gemini-2.5-flash-image"


class ProgressConfig(BaseModel):
    """Timings for the simulated progress bar."""
    single_duration_seconds: float = Field(default=8.0, gt=0)
    multi_duration_seconds: float = Field(default=15.0, gt=0)
    tick_seconds: float = Field(default=0.1, gt=0)
    grace_seconds: float = Field(default=0.6, ge=0)


class Config(BaseModel):
    """Main application configuration."""

    # API Keys
    gemini_api_key: str = Field(..., alias="GEMINI_API_KEY", min_length=1)

    # Application Settings
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Provider Settings
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    timeout_gemini_seconds: float = Field(default=60.0, alias="TIMEOUT_GEMINI_SECONDS")

    models: ModelsConfig = Field(default_factory=ModelsConfig)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)

    class Config:
        populate_by_name = True


# Global config instance
_config: Optional[Config] = None


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from environment and YAML file.

    Args:
        path: YAML file to read (defaults to config/models.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    global _config

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found at {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(file_config, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")

    # YAML settings win over same-named environment variables
    config_data = {
        **os.environ,
        **file_config,
    }

    try:
        _config = Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")

    set_log_level(_config.log_level)

    logger.info(
        "Configuration loaded successfully",
        extra={
            "environment": _config.app_env,
            "text_model": _config.models.text,
            "image_model": _config.models.image,
        }
    )

    return _config


def get_config() -> Config:
    """
    Get the current configuration instance.

    Raises:
        ConfigurationError: If config not loaded
    """
    if _config is None:
        raise ConfigurationError("Configuration not loaded. Call load_config() first.")
    return _config
