"""Tests for launch models."""

import pytest
from pydantic import ValidationError

from buildwatch.launch.models import BuildOutcome, LaunchResult, LaunchSpec
from buildwatch.parsing.models import DiagnosticEntry, DiagnosticKind, ParsedLog


class TestBuildOutcome:
    """Test BuildOutcome derivation."""

    @pytest.mark.parametrize(
        "code,outcome",
        [
            (0, BuildOutcome.SUCCESS),
            (1, BuildOutcome.FAILURE),
            (2, BuildOutcome.FAILURE),
            (-9, BuildOutcome.FAILURE),
        ],
    )
    def test_from_exit_code(self, code: int, outcome: BuildOutcome):
        assert BuildOutcome.from_exit_code(code) == outcome


class TestLaunchSpec:
    """Test LaunchSpec model."""

    def test_defaults(self):
        spec = LaunchSpec(working_directory="/src", command="make")
        assert spec.arguments == ()
        assert spec.extractor_selector == "gcc"

    def test_arguments_become_tuple(self):
        """Test argument lists are stored as an immutable tuple."""
        spec = LaunchSpec(working_directory="/src", command="make", arguments=["-j4", "all"])
        assert spec.arguments == ("-j4", "all")
        assert spec.command_line() == "make -j4 all"

    def test_spec_is_frozen(self):
        spec = LaunchSpec(working_directory="/src", command="make")
        with pytest.raises(ValidationError):
            spec.command = "ninja"

    def test_empty_command_rejected(self):
        with pytest.raises(ValidationError):
            LaunchSpec(working_directory="/src", command="")


class TestLaunchResult:
    """Test LaunchResult."""

    def test_to_dict(self):
        """Test the summary includes counts and completeness."""
        log = ParsedLog()
        log.add(
            DiagnosticEntry(
                kind=DiagnosticKind.WARNING,
                filename="a.c",
                line=1,
                column=1,
                text="a.c:1:1: warning: w\n x\n ^",
                start_index=0,
                end_index=25,
            )
        )
        result = LaunchResult(
            outcome=BuildOutcome.FAILURE,
            return_code=2,
            parsed_log=log,
            command="make",
        )

        data = result.to_dict()

        assert result.success is False
        assert data["outcome"] == "failure"
        assert data["warnings"] == 1
        assert data["errors"] == 0
        assert data["complete"] is False
        assert data["source_error"] is None
        assert data["extractor_errors"] == []
