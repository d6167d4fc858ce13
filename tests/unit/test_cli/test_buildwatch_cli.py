"""Tests for the buildwatch command line."""

import sys

import pytest
from click.testing import CliRunner

from buildwatch.cli.main import _exit_status, main


@pytest.fixture
def cli_runner(monkeypatch) -> CliRunner:
    """CLI runner whose child processes write UTF-8."""
    monkeypatch.setenv("PYTHONIOENCODING", "utf-8")
    return CliRunner()


class TestMainCommand:
    """Test the command group."""

    def test_version_flag(self, cli_runner):
        """Test version flag."""
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, cli_runner):
        result = cli_runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "run" in result.output
        assert "parse" in result.output


class TestParseCommand:
    """Test the parse subcommand."""

    def test_log_with_errors(self, cli_runner, gcc_error_log_path):
        """Test a log with errors prints them and exits 1."""
        result = cli_runner.invoke(main, ["parse", str(gcc_error_log_path)])

        assert result.exit_code == 1
        assert "./regex.c:280:4" in result.output
        assert "Build Diagnostics" in result.output

    def test_small_chunks(self, cli_runner, gcc_error_log_path):
        """Test small read chunks still find every entry."""
        result = cli_runner.invoke(
            main, ["parse", str(gcc_error_log_path), "--chunk-size", "64", "--overlap", "256"]
        )

        assert result.exit_code == 1
        for location in ("./regex.c:280:4", "./regex.c:281:4", "./regex.c:288:9"):
            assert location in result.output

    def test_clean_log(self, cli_runner, tmp_path):
        """Test a log without errors exits 0."""
        log = tmp_path / "build.log"
        log.write_text("make: Nothing to be done for 'all'.\n", encoding="utf-8")

        result = cli_runner.invoke(main, ["parse", str(log)])

        assert result.exit_code == 0

    def test_unknown_parser(self, cli_runner, gcc_error_log_path):
        """Test an unknown parser name exits 2."""
        result = cli_runner.invoke(main, ["parse", str(gcc_error_log_path), "--parser", "msvc"])

        assert result.exit_code == 2
        assert "Unknown extractor: msvc" in result.output

    def test_negative_overlap_rejected(self, cli_runner, gcc_error_log_path):
        result = cli_runner.invoke(main, ["parse", str(gcc_error_log_path), "--overlap", "-1"])
        assert result.exit_code == 2


class TestRunCommand:
    """Test the run subcommand."""

    def test_successful_build(self, cli_runner, make_dir):
        """Test a successful build exits 0 and shows its warnings."""
        result = cli_runner.invoke(
            main, ["run", "--cwd", str(make_dir), sys.executable, "gcc_make_success.py"]
        )

        assert result.exit_code == 0
        assert "Finished building target: hello" in result.output
        assert "../src/hello.cpp:17:6" in result.output
        assert "Build succeeded" in result.output

    def test_failed_build(self, cli_runner, make_dir):
        """Test the build's exit code is passed through."""
        result = cli_runner.invoke(
            main, ["run", "--cwd", str(make_dir), sys.executable, "gcc_make_failure.py"]
        )

        assert result.exit_code == 2
        assert "Build failed with exit code 2" in result.output

    def test_quiet_hides_transcript(self, cli_runner, make_dir):
        """Test --quiet shows entries but not raw output."""
        result = cli_runner.invoke(
            main, ["run", "-q", "--cwd", str(make_dir), sys.executable, "gcc_make_success.py"]
        )

        assert result.exit_code == 0
        assert "Finished building target: hello" not in result.output
        assert "../src/hello.cpp:16:6" in result.output

    def test_build_flags_not_parsed(self, cli_runner, make_dir):
        """Test options after the command belong to the build."""
        result = cli_runner.invoke(
            main,
            ["run", "--cwd", str(make_dir), sys.executable, "-q", "gcc_make_success.py"],
        )

        assert result.exit_code == 0
        assert "Finished building target: hello" in result.output

    def test_missing_command(self, cli_runner, tmp_path):
        """Test a command that cannot be started exits 127."""
        result = cli_runner.invoke(
            main, ["run", "--cwd", str(tmp_path), "buildwatch-no-such-command-xyz"]
        )

        assert result.exit_code == 127
        assert "Build Not Started" in result.output

    def test_unknown_parser(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            main, ["run", "--cwd", str(tmp_path), "--parser", "msvc", "make"]
        )
        assert result.exit_code == 2


class TestExitStatus:
    """Test return code mapping."""

    @pytest.mark.parametrize(
        "code,status",
        [(0, 0), (2, 2), (300, 255), (-9, 137), (-15, 143)],
    )
    def test_exit_status(self, code: int, status: int):
        assert _exit_status(code) == status
