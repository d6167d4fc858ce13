"""
Streaming Parse Engine

Parses build output as it arrives chunk by chunk. Each chunk is parsed
together with the last ``chunk_overlap`` bytes of earlier output, so an
entry split across two chunks is still recognized whole. Entries found
again in the overlap are filtered out by exact deduplication.

The overlap must be at least the byte span of the largest entry of the
chosen format. With a smaller overlap an entry that straddles a chunk
boundary can be missed; a larger overlap only costs re-parse time.
"""

from typing import AsyncIterator

from pydantic import ValidationError

from buildwatch.core.events import EventBus
from buildwatch.core.exceptions.errors import (
    EngineStateError,
    ExtractorError,
    SourceStreamError,
)
from buildwatch.core.logger.logger import get_logger
from buildwatch.parsing.events import (
    EntryDiscovered,
    ExtractorFailed,
    ParseCompleted,
    SourceError,
)
from buildwatch.parsing.extractors.base import DiagnosticExtractor
from buildwatch.parsing.models import DiagnosticEntry, EntryKey, ParsedLog, RawEntry

logger = get_logger(__name__)


class StreamingParseEngine:
    """
    Single-use incremental parser for one build output stream.

    The engine:
    1. Accumulates every chunk into a private, append-only buffer
    2. Runs the extractor on the chunk plus the overlap before it
    3. Drops candidates whose full key was already reported
    4. Publishes each new entry before the next candidate is handled

    Lifecycle: ``feed`` any number of times, then exactly one of ``end``
    or ``fail``. After that the engine is closed.
    """

    def __init__(
        self,
        extractor: DiagnosticExtractor,
        chunk_overlap: int | None = None,
        bus: EventBus | None = None,
        encoding: str = "utf-8",
    ):
        """
        Initialize the engine.

        Args:
            extractor: Extractor for the build output format.
            chunk_overlap: Bytes of earlier output re-parsed with each chunk.
                Defaults to the extractor's ``default_chunk_overlap`` and is
                raised to its ``min_chunk_overlap`` when smaller.
            bus: Event bus to publish on. A private bus is created if omitted.
            encoding: Encoding used to decode entry text.

        Raises:
            ValueError: If chunk_overlap is negative.
        """
        if chunk_overlap is None:
            chunk_overlap = extractor.default_chunk_overlap
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must be >= 0, got {chunk_overlap}")
        if chunk_overlap < extractor.min_chunk_overlap:
            logger.info(
                f"Raising chunk_overlap from {chunk_overlap} to "
                f"{extractor.min_chunk_overlap} for extractor {extractor.name!r}"
            )
            chunk_overlap = extractor.min_chunk_overlap

        self.extractor = extractor
        self.chunk_overlap = chunk_overlap
        self.bus = bus or EventBus()
        self.encoding = encoding

        self._buffer = bytearray()
        self._offset = 0
        self._log = ParsedLog()
        self._known: set[EntryKey] = set()
        self._closed = False
        self._feeding = False

    @property
    def log(self) -> ParsedLog:
        """The parsed log so far."""
        return self._log

    @property
    def text(self) -> bytes:
        """Snapshot of all output received so far."""
        return bytes(self._buffer)

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._offset

    @property
    def closed(self) -> bool:
        """Whether ``end`` or ``fail`` has been called."""
        return self._closed

    def feed(self, chunk: bytes) -> list[DiagnosticEntry]:
        """
        Consume one chunk of output.

        Args:
            chunk: Next bytes of the stream, in arrival order.

        Returns:
            Entries discovered by this call, in discovery order.

        Raises:
            EngineStateError: If the engine is closed or the call is reentrant.
        """
        self._ensure_open("feed")
        if not chunk:
            return []

        self._feeding = True
        offset = self._offset
        try:
            self._buffer.extend(chunk)

            # For the first chunk this is just the chunk itself
            window_start = max(0, offset - self.chunk_overlap)
            window = bytes(self._buffer[window_start:offset + len(chunk)])

            logger.debug(
                f"Parsing chunk at {offset} ({len(chunk)} bytes, window {len(window)} bytes)"
            )

            try:
                candidates = self._extract(window, window_start)
            except ExtractorError as e:
                logger.warning(f"Dropping candidates of chunk at offset {offset}: {e}")
                self.bus.publish(ExtractorFailed(error=e, chunk_offset=offset))
                return []

            discovered: list[DiagnosticEntry] = []
            for entry in candidates:
                if entry.key in self._known:
                    continue
                self._known.add(entry.key)
                self._log.add(entry)
                discovered.append(entry)
                self.bus.publish(EntryDiscovered(entry=entry))
            return discovered
        finally:
            self._offset = offset + len(chunk)
            self._feeding = False

    def end(self) -> ParsedLog:
        """
        Signal that the input has no more data.

        Returns:
            The complete parsed log.

        Raises:
            EngineStateError: If the engine is closed or a chunk is being fed.
        """
        self._ensure_open("end")
        self._closed = True
        self._log.complete = True

        counts = self._log.counts
        logger.debug(
            f"Parse complete: {counts.errors} errors, {counts.warnings} warnings, "
            f"{counts.notes} notes in {self._offset} bytes"
        )
        self.bus.publish(ParseCompleted(counts=counts))
        return self._log

    def fail(self, error: Exception) -> SourceStreamError:
        """
        Signal that the input source failed.

        The log gathered so far is kept but stays marked incomplete.

        Args:
            error: The failure reported by the source.

        Returns:
            The failure as a SourceStreamError.

        Raises:
            EngineStateError: If the engine is closed or a chunk is being fed.
        """
        self._ensure_open("fail")
        self._closed = True
        self._log.complete = False

        if not isinstance(error, SourceStreamError):
            error = SourceStreamError(
                f"Reading build output failed: {error}",
                details={"offset": self._offset},
            )
        logger.error(f"Parse aborted after {self._offset} bytes: {error}")
        self.bus.publish(SourceError(error=error))
        return error

    async def parse(
        self,
        source: AsyncIterator[bytes],
        source_name: str = "input",
    ) -> ParsedLog:
        """
        Drive the engine from an async chunk source until it is exhausted.

        Args:
            source: Async iterator of byte chunks.
            source_name: Stream name used in error details.

        Returns:
            The complete parsed log.

        Raises:
            SourceStreamError: If the source raises while being read.
        """
        chunks = aiter(source)
        while True:
            try:
                chunk = await anext(chunks)
            except StopAsyncIteration:
                break
            except SourceStreamError as e:
                raise self.fail(e)
            except Exception as e:
                raise self.fail(
                    SourceStreamError(
                        f"Reading {source_name} failed: {e}",
                        stream=source_name,
                        details={"offset": self._offset},
                    )
                ) from e
            self.feed(chunk)

        return self.end()

    def _extract(self, window: bytes, window_start: int) -> list[DiagnosticEntry]:
        """Run the extractor and turn its candidates into entries."""
        name = self.extractor.name
        try:
            raw_entries = self.extractor.extract(window, window_start)
        except ExtractorError:
            raise
        except Exception as e:
            raise ExtractorError(
                f"Extractor raised {type(e).__name__}: {e}", extractor=name
            ) from e

        if not isinstance(raw_entries, list):
            raise ExtractorError(
                f"Extractor returned {type(raw_entries).__name__}, expected list",
                extractor=name,
            )

        entries = []
        for raw in raw_entries:
            if not isinstance(raw, RawEntry):
                raise ExtractorError(
                    f"Extractor returned {type(raw).__name__}, expected RawEntry",
                    extractor=name,
                )
            if not 0 <= raw.start_index <= raw.end_index <= len(self._buffer):
                raise ExtractorError(
                    f"Entry span [{raw.start_index}, {raw.end_index}) is outside "
                    f"the output ({len(self._buffer)} bytes)",
                    extractor=name,
                )
            try:
                entries.append(self._to_entry(raw))
            except ValidationError as e:
                raise ExtractorError(f"Invalid entry: {e}", extractor=name) from e
        return entries

    def _to_entry(self, raw: RawEntry) -> DiagnosticEntry:
        text = bytes(self._buffer[raw.start_index:raw.end_index])
        return DiagnosticEntry(
            kind=raw.kind,
            filename=raw.filename,
            line=raw.line,
            column=raw.column,
            text=text.decode(self.encoding, errors="replace"),
            start_index=raw.start_index,
            end_index=raw.end_index,
        )

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise EngineStateError(f"{operation}() called on a finished parse engine")
        if self._feeding:
            raise EngineStateError(f"{operation}() called from inside an event handler")


async def iter_stream_chunks(
    reader,
    chunk_size: int = 65536,
) -> AsyncIterator[bytes]:
    """
    Yield chunks from an ``asyncio.StreamReader`` until EOF.

    Args:
        reader: Stream reader (anything with ``async read(n)``).
        chunk_size: Maximum bytes per chunk.
    """
    while True:
        chunk = await reader.read(chunk_size)
        if not chunk:
            return
        yield chunk
