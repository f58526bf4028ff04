"""
Configuration management for Vigie.

Hybrid configuration system using YAML files and environment variables.
Priority: Environment variables > YAML config > Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Vigie configuration schema.

    Loads configuration from:
    1. Environment variables with VIGIE_ prefix (highest priority)
    2. YAML configuration files
    3. Pydantic defaults (lowest priority)

    Configuration files:
        - config/default.yaml: Base defaults
        - config/production.yaml: Production overrides
        - config/development.yaml: Development overrides
        - config/test.yaml: Test overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="VIGIE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Engine
    default_timeout: float = Field(
        default=1.0,
        gt=0,
        le=3600,
        description="Procedure timeout in seconds when none is registered",
    )

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(
        default=None, description="Log directory (stdout only when unset)"
    )
    verbose: int = Field(default=1, ge=0, le=3)

    # Metrics
    metrics_enabled: bool = Field(default=True)

    # HTTP adapter
    api_prefix: str = Field(default="/health")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Let environment variables win over values read from YAML."""
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Normalize API prefix to a leading slash without trailing slash."""
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("api_prefix must not be the site root")
        return v


def _config_dir() -> Path:
    """Resolve configuration directory (VIGIE_CONFIG_DIR or project config/)."""
    override = os.getenv("VIGIE_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[3] / "config"


def _read_yaml(path: Path) -> dict:
    """Read a YAML mapping, empty when file is missing or blank."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    if loaded and not isinstance(loaded, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return loaded or {}


def load_config(config_file: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML files.

    Priority: Environment variables > environment-specific YAML > default YAML

    Args:
        config_file: Optional YAML filename override

    Returns:
        Settings instance
    """
    env = os.getenv("ENV", "production")

    config_map = {
        "production": "production.yaml",
        "development": "development.yaml",
        "test": "test.yaml",
    }

    config_dir = _config_dir()
    merged_config = _read_yaml(config_dir / "default.yaml")

    if config_file is None:
        config_file = os.getenv("VIGIE_CONFIG")
        if not config_file:
            config_file = config_map.get(env, "production.yaml")

    merged_config.update(_read_yaml(config_dir / config_file))

    return Settings(**merged_config)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get lazily loaded settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(settings: Settings) -> None:
    """Replace the cached settings instance (tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Drop the cached settings instance so the next access reloads."""
    global _settings
    _settings = None
