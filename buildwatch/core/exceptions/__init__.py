"""Exception definitions module."""

from buildwatch.core.exceptions.errors import (
    BuildWatchError,
    ConfigurationError,
    EngineStateError,
    ExtractorError,
    ExtractorNotFoundError,
    SourceStreamError,
    SpawnError,
)

__all__ = [
    "BuildWatchError",
    "ConfigurationError",
    "EngineStateError",
    "ExtractorError",
    "ExtractorNotFoundError",
    "SourceStreamError",
    "SpawnError",
]
