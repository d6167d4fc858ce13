"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path
from typing import Any

import pytest

from buildwatch.core.config.settings import LaunchSettings, ParserSettings, Settings
from buildwatch.core.events import EventBus
from buildwatch.launch.runner import AsyncioProcessRunner

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class EventRecorder:
    """Collects every event published on a bus, in publish order."""

    def __init__(self, bus: EventBus, *event_types: type) -> None:
        self.events: list[Any] = []
        for event_type in event_types:
            bus.subscribe(event_type, self.events.append)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]

    def index_of_first(self, event_type: type) -> int:
        return next(i for i, e in enumerate(self.events) if isinstance(e, event_type))


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def gcc_error_log_path() -> Path:
    """Path to a gcc log with 3 errors, 1 warning and 1 note."""
    return FIXTURES_DIR / "gcc" / "error.txt"


@pytest.fixture
def gcc_error_log(gcc_error_log_path: Path) -> bytes:
    """Raw bytes of the gcc sample log."""
    return gcc_error_log_path.read_bytes()


@pytest.fixture
def make_dir() -> Path:
    """Directory containing the simulated make scripts."""
    return FIXTURES_DIR / "make"


@pytest.fixture
def python_executable() -> str:
    """Interpreter used to run the simulated builds."""
    return sys.executable


@pytest.fixture
def utf8_runner() -> AsyncioProcessRunner:
    """Process runner whose children write UTF-8 regardless of locale."""
    return AsyncioProcessRunner(env={**os.environ, "PYTHONIOENCODING": "utf-8"})


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of config files and environment."""
    return Settings(
        parser=ParserSettings(chunk_overlap=None, read_chunk_size=65536),
        launch=LaunchSettings(default_extractor="gcc", encoding="utf-8"),
    )


@pytest.fixture
def record_events() -> type[EventRecorder]:
    """Factory for recorders: ``record_events(bus, EventA, EventB, ...)``."""
    return EventRecorder


@pytest.fixture
def gcc_caret_log() -> bytes:
    """Modern gcc log with ``^~~~~`` carets: 2 errors, 1 warning, 1 note."""
    return (FIXTURES_DIR / "gcc" / "caret_ranges.txt").read_bytes()
