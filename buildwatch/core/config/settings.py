"""Application settings using Pydantic Settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildwatch.core.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader


class ParserSettings(BaseSettings):
    """Streaming parse engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDWATCH_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    chunk_overlap: int | None = Field(
        default=None,
        ge=0,
        description="Bytes of earlier output re-parsed with each chunk (None = extractor default)",
    )
    read_chunk_size: int = Field(
        default=65536,
        ge=1,
        description="Maximum bytes read from a stream per chunk",
    )

    @field_validator("chunk_overlap", mode="before")
    @classmethod
    def validate_chunk_overlap(cls, v: int | str | None) -> int | str | None:
        """Treat an empty value as "use the extractor default"."""
        if v == "":
            return None
        return v


class LaunchSettings(BaseSettings):
    """Build launch settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDWATCH_LAUNCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_extractor: str = Field(
        default="gcc",
        description="Extractor used when none is given",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode raw build output",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDWATCH_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="WARNING",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    parser: ParserSettings = Field(default_factory=ParserSettings)
    launch: LaunchSettings = Field(default_factory=LaunchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            parser=ParserSettings(**_yaml_section(loader, "parser", ParserSettings)),
            launch=LaunchSettings(**_yaml_section(loader, "launch", LaunchSettings)),
            logging=LoggingSettings(**_yaml_section(loader, "logging", LoggingSettings)),
        )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from default locations.

        Priority: Environment variables > .env > config/default.yaml > defaults

        Returns:
            Settings instance.
        """
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH)
        return cls()


def _yaml_section(
    loader: ConfigLoader,
    section: str,
    settings_cls: type[BaseSettings],
) -> dict[str, Any]:
    """Return the YAML values of a section that the environment does not override.

    Init kwargs take precedence over environment variables in pydantic-settings,
    so null values and keys set through the environment are left out.
    """
    prefix = settings_cls.model_config.get("env_prefix", "")
    return {
        key: value
        for key, value in loader.get_section(section).items()
        if value is not None and f"{prefix}{key}".upper() not in os.environ
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
