"""Main CLI entry point for buildwatch."""

import asyncio
import sys
from pathlib import Path
from typing import AsyncIterator

import click

from buildwatch import __version__
from buildwatch.cli.display import show_entry, show_error, show_raw, show_summary
from buildwatch.core.config.settings import Settings, get_settings
from buildwatch.core.events import EventBus
from buildwatch.core.exceptions.errors import (
    ExtractorNotFoundError,
    SourceStreamError,
    SpawnError,
)
from buildwatch.core.logger.logger import setup_logging
from buildwatch.launch import (
    BuildErrorFound,
    BuildExtractorWarning,
    BuildLaunchOrchestrator,
    BuildNoteFound,
    BuildWarningFound,
    LaunchSpec,
    RawOutput,
)
from buildwatch.parsing import (
    EntryDiscovered,
    ExtractorFailed,
    StreamingParseEngine,
    extractor_registry,
)

SPAWN_FAILURE_EXIT_CODE = 127


def _with_overlap(settings: Settings, overlap: int | None) -> Settings:
    """Return settings with the chunk overlap replaced, if one was given."""
    if overlap is None:
        return settings
    parser = settings.parser.model_copy(update={"chunk_overlap": overlap})
    return settings.model_copy(update={"parser": parser})


def _exit_status(return_code: int) -> int:
    """Map a process return code to a shell exit status."""
    if return_code < 0:
        # Killed by a signal
        return 128 - return_code
    return min(return_code, 255)


async def _read_file_chunks(path: Path, chunk_size: int) -> AsyncIterator[bytes]:
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            yield chunk


@click.group()
@click.version_option(version=__version__, prog_name="buildwatch")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """buildwatch - live errors and warnings from build output."""
    if verbose:
        logging_settings = get_settings().logging.model_copy(update={"level": "DEBUG"})
        setup_logging(logging_settings)


@main.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Directory to run the build in.",
)
@click.option("--parser", "parser_name", default=None, help="Extractor for the build output.")
@click.option("--overlap", type=click.IntRange(min=0), default=None, help="Chunk overlap in bytes.")
@click.option("--quiet", "-q", is_flag=True, help="Hide the raw build transcript.")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def run(
    cwd: str,
    parser_name: str | None,
    overlap: int | None,
    quiet: bool,
    command: tuple[str, ...],
) -> None:
    """Launch a build COMMAND and report its diagnostics as they appear."""
    settings = _with_overlap(get_settings(), overlap)
    selector = parser_name or settings.launch.default_extractor

    bus = EventBus()
    if quiet:
        for event_type in (BuildErrorFound, BuildWarningFound, BuildNoteFound):
            bus.subscribe(event_type, lambda event: show_entry(event.entry))
    else:
        bus.subscribe(RawOutput, lambda event: show_raw(event.text))
    bus.subscribe(
        BuildExtractorWarning, lambda event: show_error("Parser Failed", str(event.error))
    )

    spec = LaunchSpec(
        working_directory=cwd,
        command=command[0],
        arguments=command[1:],
        extractor_selector=selector,
    )
    orchestrator = BuildLaunchOrchestrator(bus=bus, settings=settings)

    try:
        result = asyncio.run(orchestrator.launch(spec))
    except ExtractorNotFoundError as e:
        show_error("Unknown Parser", str(e))
        sys.exit(2)
    except SpawnError as e:
        show_error("Build Not Started", str(e))
        sys.exit(SPAWN_FAILURE_EXIT_CODE)

    if not quiet:
        for entry in result.parsed_log.entries:
            show_entry(entry)
    show_summary(result.parsed_log, result)
    sys.exit(_exit_status(result.return_code))


@main.command()
@click.argument("logfile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--parser", "parser_name", default=None, help="Extractor for the log format.")
@click.option("--overlap", type=click.IntRange(min=0), default=None, help="Chunk overlap in bytes.")
@click.option("--chunk-size", type=click.IntRange(min=1), default=None, help="Bytes read per chunk.")
def parse(
    logfile: Path,
    parser_name: str | None,
    overlap: int | None,
    chunk_size: int | None,
) -> None:
    """Stream a saved build LOGFILE through the parser."""
    settings = _with_overlap(get_settings(), overlap)
    selector = parser_name or settings.launch.default_extractor

    try:
        extractor = extractor_registry.get(selector)
    except ExtractorNotFoundError as e:
        show_error("Unknown Parser", str(e))
        sys.exit(2)

    engine = StreamingParseEngine(
        extractor,
        chunk_overlap=settings.parser.chunk_overlap,
        encoding=settings.launch.encoding,
    )
    engine.bus.subscribe(EntryDiscovered, lambda event: show_entry(event.entry))
    engine.bus.subscribe(
        ExtractorFailed, lambda event: show_error("Parser Failed", str(event.error))
    )

    source = _read_file_chunks(logfile, chunk_size or settings.parser.read_chunk_size)
    try:
        parsed_log = asyncio.run(engine.parse(source, source_name=str(logfile)))
    except SourceStreamError as e:
        show_error("Read Failed", str(e))
        show_summary(engine.log)
        sys.exit(1)

    show_summary(parsed_log)
    sys.exit(1 if parsed_log.errors else 0)


if __name__ == "__main__":
    main()
