"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from buildwatch.launch.models import LaunchResult
from buildwatch.parsing.models import DiagnosticEntry, DiagnosticKind, ParsedLog

console = Console()

KIND_STYLES = {
    DiagnosticKind.ERROR: "bold red",
    DiagnosticKind.WARNING: "bold yellow",
    DiagnosticKind.NOTE: "bold cyan",
    DiagnosticKind.OTHER: "dim",
}


def show_entry(entry: DiagnosticEntry) -> None:
    """Print one diagnostic as soon as it is found."""
    header = Text()
    header.append(f"{entry.kind.value:<8}", style=KIND_STYLES[entry.kind])
    header.append(entry.to_display(), style="bold")
    console.print(header)
    console.print(Text(entry.text), style="dim")


def show_raw(text: str) -> None:
    """Print raw build output without markup processing."""
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def show_summary(parsed_log: ParsedLog, result: LaunchResult | None = None) -> None:
    """Display a summary table of the parsed diagnostics."""
    table = Table(title="Build Diagnostics", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Count", justify="right")

    table.add_row(Text("errors", style=KIND_STYLES[DiagnosticKind.ERROR]), str(parsed_log.errors))
    table.add_row(Text("warnings", style=KIND_STYLES[DiagnosticKind.WARNING]), str(parsed_log.warnings))
    table.add_row(Text("notes", style=KIND_STYLES[DiagnosticKind.NOTE]), str(parsed_log.notes))

    console.print()
    console.print(table)

    if not parsed_log.complete:
        console.print("[yellow]Output could not be read to the end; results are incomplete.[/]")

    if result is not None and result.extractor_errors:
        console.print(
            f"[yellow]{len(result.extractor_errors)} chunk(s) could not be parsed; "
            "diagnostics may be missing.[/]"
        )

    if result is not None:
        if result.success:
            console.print(
                f"[bold green]Build succeeded[/] [dim]({result.duration_seconds:.1f}s)[/]"
            )
        else:
            console.print(
                f"[bold red]Build failed with exit code {result.return_code}[/] "
                f"[dim]({result.duration_seconds:.1f}s)[/]"
            )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{title}[/]",
            border_style="red",
        )
    )
