"""
Configuration management for State Monitor.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class MonitorSettings(BaseSettings):
    """State monitor configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    default_ignored_paths: List[str] = Field(
        default_factory=list,
        description="Field paths ignored by every monitor the CLI creates (JSON list)"
    )
    ignore_file: Optional[str] = Field(
        default=None,
        description="YAML file with an 'ignore' list of field paths"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    class Config:
        env_prefix = "STATE_MONITOR_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Settings shared by statemonctl commands, read on first use
_config: Optional[MonitorSettings] = None


def get_config() -> MonitorSettings:
    """
    Return the cached monitor settings.

    STATE_MONITOR_* variables (and .env) are read the first time this is
    called; an invalid value raises pydantic's ValidationError here.
    """
    global _config
    if _config is None:
        _config = MonitorSettings()
    return _config


def reload_config() -> MonitorSettings:
    """Drop the cached settings and read STATE_MONITOR_* variables again."""
    global _config
    _config = MonitorSettings()
    return _config
