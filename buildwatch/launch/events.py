"""Events published by the build launch orchestrator."""

from dataclasses import dataclass

from buildwatch.core.exceptions.errors import ExtractorError, SourceStreamError
from buildwatch.parsing.models import DiagnosticEntry, ParsedLog


@dataclass(frozen=True)
class RawOutput:
    """A chunk of build output, forwarded verbatim."""

    text: str
    stream: str  # "stdout" or "stderr"


@dataclass(frozen=True)
class BuildErrorFound:
    entry: DiagnosticEntry


@dataclass(frozen=True)
class BuildWarningFound:
    entry: DiagnosticEntry


@dataclass(frozen=True)
class BuildNoteFound:
    entry: DiagnosticEntry


@dataclass(frozen=True)
class BuildDone:
    """The build process exited and its output streams are drained."""

    exit_code: int


@dataclass(frozen=True)
class FinalReport:
    """All diagnostics of the build, published when parsing completes."""

    parsed_log: ParsedLog


@dataclass(frozen=True)
class BuildSourceError:
    """Reading the build's error stream failed; diagnostics are incomplete."""

    error: SourceStreamError


@dataclass(frozen=True)
class BuildExtractorWarning:
    """The extractor failed on a chunk of the error stream; its diagnostics were dropped."""

    error: ExtractorError
    chunk_offset: int
