"""Custom exception definitions for buildwatch."""

from typing import Any


class BuildWatchError(Exception):
    """Base exception for all buildwatch errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class SourceStreamError(BuildWatchError):
    """Exception raised when reading the diagnostic stream fails."""

    def __init__(
        self,
        message: str,
        stream: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize source stream error.

        Args:
            message: Error message.
            stream: Name of the stream being read (e.g. "stderr").
            details: Additional error details.
        """
        details = details or {}
        if stream:
            details["stream"] = stream
        super().__init__(message, details)


class SpawnError(BuildWatchError):
    """Exception raised when a build process cannot be started."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        working_directory: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize spawn error.

        Args:
            message: Error message.
            command: Command that failed to start.
            working_directory: Directory the command was started in.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = command
        if working_directory:
            details["working_directory"] = working_directory
        super().__init__(message, details)


class ExtractorError(BuildWatchError):
    """Exception raised when an extractor fails on a parse window."""

    def __init__(
        self,
        message: str,
        extractor: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize extractor error.

        Args:
            message: Error message.
            extractor: Name of the extractor that failed.
            details: Additional error details.
        """
        details = details or {}
        if extractor:
            details["extractor"] = extractor
        super().__init__(message, details)


class ExtractorNotFoundError(BuildWatchError):
    """Exception raised when no extractor is registered under a name."""

    def __init__(
        self,
        selector: str,
        available: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"selector": selector}
        if available is not None:
            details["available"] = available
        super().__init__(f"Unknown extractor: {selector}", details)
        self.selector = selector


class EngineStateError(BuildWatchError):
    """Exception raised when a parse engine is used outside its lifecycle."""


class ConfigurationError(BuildWatchError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
