"""
GCC and Clang diagnostic extractor.

Recognizes the classic three-line diagnostic layout::

    ./regex.c:280:4: error: 'spatule' undeclared (first use in this function)
        spatule++
        ^

as well as the annotated layout of newer compilers, where the source
line is prefixed with ``NNN |`` and the caret line with ``|``. Messages
without a source line and caret (e.g. "each undeclared identifier is
reported only once") are not reported. The caret line only matches once
its newline has arrived, so a ``^~~~~`` range cut by a chunk boundary is
not reported with a shorter span.
"""

import re

from buildwatch.parsing.extractors.base import DiagnosticExtractor
from buildwatch.parsing.models import DiagnosticKind, RawEntry

DIAGNOSTIC_PATTERN = re.compile(
    rb"^(?P<file>[^:\n]+):(?P<line>\d+):(?:(?P<column>\d+):)? "
    rb"(?P<kind>fatal error|error|warning|note|remark): [^\n]*\n"
    rb"[^\n]*\n"
    rb"[ \t]*(?:\|[ \t]*)?\^~*(?=\r?\n)",
    re.MULTILINE,
)

KIND_MAP = {
    b"fatal error": DiagnosticKind.ERROR,
    b"error": DiagnosticKind.ERROR,
    b"warning": DiagnosticKind.WARNING,
    b"note": DiagnosticKind.NOTE,
    b"remark": DiagnosticKind.OTHER,
}


class GccExtractor(DiagnosticExtractor):
    """Extractor for GCC/Clang build output."""

    name = "gcc"
    description = "GCC and Clang diagnostics with source line and caret"
    default_chunk_overlap = 200
    # The byte before the window tells whether it starts on a line boundary
    min_chunk_overlap = 1

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize the extractor.

        Args:
            encoding: Encoding used to decode file names.
        """
        self.encoding = encoding

    def extract(self, window: bytes, position_correction: int) -> list[RawEntry]:
        start = 0
        if position_correction > 0:
            # With at least one byte of overlap, every line that starts in
            # the new output is preceded by its newline inside the window.
            first_newline = window.find(b"\n")
            if first_newline < 0:
                return []
            start = first_newline + 1

        entries: list[RawEntry] = []
        for match in DIAGNOSTIC_PATTERN.finditer(window, start):
            column = match.group("column")
            entries.append(
                RawEntry(
                    kind=KIND_MAP[match.group("kind")],
                    filename=match.group("file").decode(self.encoding, errors="replace"),
                    line=int(match.group("line")),
                    column=int(column) if column else 0,
                    start_index=match.start() + position_correction,
                    end_index=match.end() + position_correction,
                )
            )
        return entries
