"""
Build Launch Orchestrator

Runs a build process and turns its error stream into live diagnostics.
Raw output from both streams is forwarded verbatim, discovered entries
are republished as build-level events as soon as the engine finds them,
and the outcome is derived from the exit code alone.
"""

import asyncio
import codecs
import time
from typing import AsyncIterator

from buildwatch.core.config.settings import Settings, get_settings
from buildwatch.core.events import EventBus
from buildwatch.core.exceptions.errors import SourceStreamError
from buildwatch.core.logger.logger import get_logger
from buildwatch.launch.events import (
    BuildDone,
    BuildErrorFound,
    BuildExtractorWarning,
    BuildNoteFound,
    BuildSourceError,
    BuildWarningFound,
    FinalReport,
    RawOutput,
)
from buildwatch.launch.models import BuildOutcome, LaunchResult, LaunchSpec
from buildwatch.launch.runner import AsyncioProcessRunner, ProcessRunner
from buildwatch.parsing.engine import StreamingParseEngine, iter_stream_chunks
from buildwatch.parsing.events import (
    EntryDiscovered,
    ExtractorFailed,
    ParseCompleted,
    SourceError,
)
from buildwatch.parsing.extractors import ExtractorRegistry, extractor_registry
from buildwatch.parsing.models import DiagnosticKind

logger = get_logger(__name__)

# Other-kind entries have no build-level event
BUILD_EVENTS = {
    DiagnosticKind.ERROR: BuildErrorFound,
    DiagnosticKind.WARNING: BuildWarningFound,
    DiagnosticKind.NOTE: BuildNoteFound,
}


class BuildLaunchOrchestrator:
    """
    Launches builds and publishes their diagnostics on ``bus``.

    Each ``launch`` call spawns one process and creates one parse engine
    bound to that process's error stream.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        registry: ExtractorRegistry | None = None,
        bus: EventBus | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            runner: Process runner. Defaults to an asyncio subprocess runner.
            registry: Extractor registry used to resolve selectors.
            bus: Bus that build events are published on.
            settings: Application settings. Uses global settings if omitted.
        """
        self.runner = runner or AsyncioProcessRunner()
        self.registry = registry or extractor_registry
        self.bus = bus or EventBus()
        self.settings = settings or get_settings()

    async def launch(self, spec: LaunchSpec) -> LaunchResult:
        """
        Run a build and parse its diagnostics as they arrive.

        Args:
            spec: What to run and which extractor to use.

        Returns:
            LaunchResult with the outcome and the parsed log.

        Raises:
            ExtractorNotFoundError: If the selector is not registered.
            SpawnError: If the process could not be started.
        """
        extractor = self.registry.get(spec.extractor_selector)
        command_line = spec.command_line()

        logger.info(f"Launching build in {spec.working_directory}: {command_line}")
        start_time = time.monotonic()
        handle = await self.runner.spawn(
            spec.command, spec.arguments, spec.working_directory
        )

        engine = StreamingParseEngine(
            extractor,
            chunk_overlap=self.settings.parser.chunk_overlap,
            encoding=self.settings.launch.encoding,
        )
        engine.bus.subscribe(EntryDiscovered, self._on_entry_discovered)
        engine.bus.subscribe(
            ParseCompleted,
            lambda event: self.bus.publish(FinalReport(parsed_log=engine.log)),
        )
        engine.bus.subscribe(
            SourceError,
            lambda event: self.bus.publish(BuildSourceError(error=event.error)),
        )
        extractor_errors: list[str] = []

        def on_extractor_failed(event: ExtractorFailed) -> None:
            extractor_errors.append(str(event.error))
            self.bus.publish(
                BuildExtractorWarning(error=event.error, chunk_offset=event.chunk_offset)
            )

        engine.bus.subscribe(ExtractorFailed, on_extractor_failed)

        parse_task = asyncio.create_task(
            engine.parse(self._forward(handle.stderr, "stderr"), source_name="stderr")
        )
        stdout_task = asyncio.create_task(self._drain(handle.stdout, "stdout"))
        wait_task = asyncio.create_task(handle.wait())

        source_error: SourceStreamError | None = None
        try:
            try:
                await parse_task
            except SourceStreamError as e:
                source_error = e
            await stdout_task
            exit_code = await wait_task
        finally:
            if not wait_task.done() and handle.kill is not None:
                handle.kill()
            for task in (parse_task, stdout_task, wait_task):
                if not task.done():
                    task.cancel()

        duration = time.monotonic() - start_time
        outcome = BuildOutcome.from_exit_code(exit_code)
        logger.info(
            f"Build exited with code {exit_code} after {duration:.1f}s ({outcome.value})"
        )
        self.bus.publish(BuildDone(exit_code=exit_code))

        return LaunchResult(
            outcome=outcome,
            return_code=exit_code,
            parsed_log=engine.log,
            duration_seconds=duration,
            command=command_line,
            source_error=str(source_error) if source_error else None,
            extractor_errors=extractor_errors,
        )

    def _on_entry_discovered(self, event: EntryDiscovered) -> None:
        build_event = BUILD_EVENTS.get(event.entry.kind)
        if build_event is not None:
            self.bus.publish(build_event(entry=event.entry))

    async def _forward(self, reader: asyncio.StreamReader, stream: str) -> AsyncIterator[bytes]:
        """Yield chunks of a stream, publishing each as raw output first."""
        decoder = codecs.getincrementaldecoder(self.settings.launch.encoding)(errors="replace")
        async for chunk in iter_stream_chunks(reader, self.settings.parser.read_chunk_size):
            text = decoder.decode(chunk)
            if text:
                self.bus.publish(RawOutput(text=text, stream=stream))
            yield chunk
        tail = decoder.decode(b"", final=True)
        if tail:
            self.bus.publish(RawOutput(text=tail, stream=stream))

    async def _drain(self, reader: asyncio.StreamReader, stream: str) -> None:
        async for _ in self._forward(reader, stream):
            pass


async def launch_build(
    spec: LaunchSpec,
    bus: EventBus | None = None,
    settings: Settings | None = None,
) -> LaunchResult:
    """Convenience function to launch one build with the default runner.

    Args:
        spec: What to run and which extractor to use.
        bus: Bus to publish build events on.
        settings: Application settings.

    Returns:
        LaunchResult with the outcome and the parsed log.
    """
    orchestrator = BuildLaunchOrchestrator(bus=bus, settings=settings)
    return await orchestrator.launch(spec)
