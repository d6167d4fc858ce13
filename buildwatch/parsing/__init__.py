"""Streaming parsing of build output into diagnostic entries.

This module provides:
- Diagnostic data models (entries, counts, parsed log)
- The streaming parse engine with overlap re-parse and deduplication
- Pluggable extractors selected by name
"""

from buildwatch.parsing.engine import StreamingParseEngine, iter_stream_chunks
from buildwatch.parsing.events import (
    EntryDiscovered,
    ExtractorFailed,
    ParseCompleted,
    SourceError,
)
from buildwatch.parsing.extractors import (
    DiagnosticExtractor,
    ExtractorRegistry,
    GccExtractor,
    extractor_registry,
)
from buildwatch.parsing.models import (
    DiagnosticCounts,
    DiagnosticEntry,
    DiagnosticKind,
    ParsedLog,
    RawEntry,
)

__all__ = [
    "DiagnosticCounts",
    "DiagnosticEntry",
    "DiagnosticExtractor",
    "DiagnosticKind",
    "EntryDiscovered",
    "ExtractorFailed",
    "ExtractorRegistry",
    "GccExtractor",
    "ParseCompleted",
    "ParsedLog",
    "RawEntry",
    "SourceError",
    "StreamingParseEngine",
    "extractor_registry",
    "iter_stream_chunks",
]
