"""
Parsing Data Models

Diagnostic entries, aggregate counts and the parsed log built up by the
streaming parse engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiagnosticKind(str, Enum):
    """Kind of diagnostic reported by a compiler."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    OTHER = "other"  # Tracked in the log, never counted


EntryKey = tuple[str, str, int, int, str, int, int]


@dataclass(frozen=True)
class RawEntry:
    """
    Candidate entry produced by an extractor.

    Offsets are absolute positions in the accumulated output, i.e. the
    extractor has already applied the position correction it was given.
    """

    kind: DiagnosticKind
    filename: str
    line: int
    column: int
    start_index: int
    end_index: int


class DiagnosticEntry(BaseModel):
    """One error, warning or note found in build output."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind = Field(..., description="Diagnostic kind")
    filename: str = Field(..., description="File the diagnostic refers to")
    line: int = Field(..., ge=0, description="Line number (1-indexed, 0 if unknown)")
    column: int = Field(..., ge=0, description="Column number (1-indexed, 0 if unknown)")
    text: str = Field(..., description="Verbatim text: header, source line and caret")
    start_index: int = Field(..., ge=0, description="Absolute start byte offset")
    end_index: int = Field(..., ge=0, description="Absolute end byte offset (exclusive)")

    @model_validator(mode="after")
    def validate_span(self) -> "DiagnosticEntry":
        """Ensure end_index >= start_index."""
        if self.end_index < self.start_index:
            raise ValueError("end_index must be >= start_index")
        return self

    @property
    def key(self) -> EntryKey:
        """Uniqueness key: every field of the entry."""
        return (
            self.kind.value,
            self.filename,
            self.line,
            self.column,
            self.text,
            self.start_index,
            self.end_index,
        )

    @property
    def span(self) -> int:
        """Number of bytes the entry covers in the output."""
        return self.end_index - self.start_index

    def to_display(self) -> str:
        """Format location for display."""
        loc = f"{self.filename}:{self.line}"
        if self.column:
            loc += f":{self.column}"
        return loc


class DiagnosticCounts(BaseModel):
    """Aggregate counts of counted diagnostic kinds."""

    model_config = ConfigDict(frozen=True)

    errors: int = 0
    warnings: int = 0
    notes: int = 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.notes


class ParsedLog(BaseModel):
    """
    Ordered, deduplicated entries of one parse session plus running counts.

    Entries are only ever appended through ``add``, which keeps the counts
    equal to the partition of ``entries`` by kind.
    """

    entries: list[DiagnosticEntry] = Field(default_factory=list)
    errors: int = 0
    warnings: int = 0
    notes: int = 0
    complete: bool = Field(
        default=False,
        description="True once the input ended cleanly",
    )

    def add(self, entry: DiagnosticEntry) -> None:
        """Append an entry and update the counts."""
        self.entries.append(entry)
        if entry.kind == DiagnosticKind.ERROR:
            self.errors += 1
        elif entry.kind == DiagnosticKind.WARNING:
            self.warnings += 1
        elif entry.kind == DiagnosticKind.NOTE:
            self.notes += 1

    @property
    def counts(self) -> DiagnosticCounts:
        """Snapshot of the current counts."""
        return DiagnosticCounts(
            errors=self.errors,
            warnings=self.warnings,
            notes=self.notes,
        )

    def by_kind(self, kind: DiagnosticKind) -> list[DiagnosticEntry]:
        """Entries of one kind, in discovery order."""
        return [e for e in self.entries if e.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump(mode="json")
