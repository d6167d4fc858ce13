"""Build launching with live diagnostics.

This module provides:
- Launch request/result models
- Process runners
- The build launch orchestrator and its events
"""

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
from buildwatch.launch.orchestrator import BuildLaunchOrchestrator, launch_build
from buildwatch.launch.runner import AsyncioProcessRunner, ProcessHandle, ProcessRunner

__all__ = [
    "AsyncioProcessRunner",
    "BuildDone",
    "BuildErrorFound",
    "BuildExtractorWarning",
    "BuildLaunchOrchestrator",
    "BuildNoteFound",
    "BuildOutcome",
    "BuildSourceError",
    "BuildWarningFound",
    "FinalReport",
    "LaunchResult",
    "LaunchSpec",
    "ProcessHandle",
    "ProcessRunner",
    "RawOutput",
    "launch_build",
]
