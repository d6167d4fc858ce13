"""Launch request and result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from buildwatch.parsing.models import ParsedLog


class BuildOutcome(str, Enum):
    """Overall outcome of a launched build, derived from its exit code."""

    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def from_exit_code(cls, code: int) -> "BuildOutcome":
        return cls.SUCCESS if code == 0 else cls.FAILURE


class LaunchSpec(BaseModel):
    """What to run and how to parse its diagnostics."""

    model_config = ConfigDict(frozen=True)

    working_directory: str = Field(..., description="Directory the build runs in")
    command: str = Field(..., min_length=1, description="Build executable or script")
    arguments: tuple[str, ...] = Field(
        default=(),
        description="Arguments passed to the command, in order",
    )
    extractor_selector: str = Field(
        default="gcc",
        description="Name of the registered extractor for the build output",
    )

    def command_line(self) -> str:
        """Format the command for display."""
        return " ".join((self.command, *self.arguments))


@dataclass
class LaunchResult:
    """Result of a launched build.

    Attributes:
        outcome: Success or failure, from the exit code alone.
        return_code: Exit code of the build process.
        parsed_log: Diagnostics parsed from the error stream.
        duration_seconds: Wall time from spawn to exit.
        command: The command line that was executed.
        source_error: Message of a failed error-stream read, if any.
        extractor_errors: Messages of extractor failures; each dropped one chunk.
    """

    outcome: BuildOutcome
    return_code: int
    parsed_log: ParsedLog = field(default_factory=ParsedLog)
    duration_seconds: float = 0.0
    command: str | None = None
    source_error: str | None = None
    extractor_errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome == BuildOutcome.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        counts = self.parsed_log.counts
        return {
            "outcome": self.outcome.value,
            "return_code": self.return_code,
            "duration_seconds": self.duration_seconds,
            "command": self.command,
            "errors": counts.errors,
            "warnings": counts.warnings,
            "notes": counts.notes,
            "complete": self.parsed_log.complete,
            "source_error": self.source_error,
            "extractor_errors": list(self.extractor_errors),
        }
