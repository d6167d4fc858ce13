"""Configuration management for buildwatch."""

from buildwatch.core.config.loader import ConfigLoader
from buildwatch.core.config.settings import (
    LaunchSettings,
    LoggingSettings,
    ParserSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "LaunchSettings",
    "LoggingSettings",
    "ParserSettings",
    "Settings",
    "get_settings",
]
