"""Events published by the streaming parse engine."""

from dataclasses import dataclass

from buildwatch.core.exceptions.errors import ExtractorError, SourceStreamError
from buildwatch.parsing.models import DiagnosticCounts, DiagnosticEntry


@dataclass(frozen=True)
class EntryDiscovered:
    """A new, previously unreported entry was found."""

    entry: DiagnosticEntry


@dataclass(frozen=True)
class ParseCompleted:
    """The input ended cleanly; carries the final counts."""

    counts: DiagnosticCounts


@dataclass(frozen=True)
class SourceError:
    """The input source failed; the parsed log is incomplete."""

    error: SourceStreamError


@dataclass(frozen=True)
class ExtractorFailed:
    """The extractor failed on one chunk; its candidates were dropped."""

    error: ExtractorError
    chunk_offset: int
