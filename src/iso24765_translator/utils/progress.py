"""
Progress visualization for translation runs.

This module renders the RunStatus snapshots emitted by the BatchProcessor
as a live terminal panel, and prints end-of-run summaries for the
translate and validate commands.

Components:
    - TranslationProgressDisplay: Rich-based live panel fed by a progress
      callback
    - print_run_summary: Statistics panel after a translation run
    - print_validation_summary: Status panel after a validation run

Example:
    from iso24765_translator.utils.progress import TranslationProgressDisplay

    display = TranslationProgressDisplay(title="Translating ISO 24765")
    processor = BatchProcessor(gateway, progress_callback=display.update)
    with display:
        asyncio.run(processor.run(terms, output_path))

Author: Leonardo Pacciani-Mori
License: MIT
"""

from datetime import timedelta
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..translation.status import RunStatistics, RunStatus


def format_duration(duration: Optional[timedelta]) -> str:
    """Format a timedelta as HH:MM:SS."""
    if duration is None:
        return "00:00:00"
    total_seconds = int(duration.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def estimate_remaining(status: RunStatus, baseline: int = 0) -> Optional[timedelta]:
    """
    Estimated time remaining based on the terms finished in this run.

    Args:
        status: Current run status.
        baseline: Terms already completed when the run started (resumed
            checkpoint), excluded from the rate.
    """
    elapsed = status.elapsed_time
    done_this_run = status.completed_count - baseline
    if elapsed is None or done_this_run <= 0:
        return None
    per_term = elapsed / done_this_run
    return per_term * (status.total - status.completed_count)


class TranslationProgressDisplay:
    """
    Rich-based live display of a translation run.

    The update() method has the signature of a BatchProcessor progress
    callback and can be passed to it directly.
    """

    def __init__(
        self,
        title: str = "Translation",
        console: Optional[Console] = None,
        max_errors: int = 5,
        refresh_rate: float = 0.5,
    ):
        self.title = title
        self.console = console or Console(stderr=True)
        self.max_errors = max_errors
        self.refresh_rate = refresh_rate
        self.status: Optional[RunStatus] = None
        self._baseline: Optional[int] = None
        self._live: Optional[Live] = None

    def _build_progress_bar(self, percent: float) -> str:
        width = 40
        filled = int(width * percent / 100)
        bar = "█" * filled + "░" * (width - filled)
        return f"[{bar}] {percent:.1f}%"

    def _build_errors_table(self, status: RunStatus) -> Table:
        table = Table(show_header=True, header_style="bold", expand=True)
        table.add_column("Recent fallbacks", style="yellow")
        for error in status.errors[-self.max_errors:]:
            table.add_row(Text(error))
        hidden = len(status.errors) - self.max_errors
        if hidden > 0:
            table.add_row(f"... and {hidden} more", style="dim")
        return table

    def _build_panel(self) -> Panel:
        status = self.status or RunStatus()
        remaining = estimate_remaining(status, self._baseline or 0)
        header_lines = [
            f"[bold]{self.title}[/bold]",
            "",
            f"Progress: {self._build_progress_bar(status.progress_percent)} "
            f"({status.completed_count}/{status.total})",
            f"Batch: {status.current_batch}/{status.total_batches} | "
            f"Current term: {status.current_term_id or '-'}",
            f"Fallback fields: {status.failed_count} | Terms with fallback: {status.failed_terms}",
            f"Time: {format_duration(status.elapsed_time)} elapsed | "
            + (f"~{format_duration(remaining)}" if remaining is not None else "calculating...")
            + " remaining",
        ]
        content = [Text.from_markup("\n".join(header_lines))]
        if status.errors:
            content.append(self._build_errors_table(status))
        return Panel(Group(*content), border_style="blue")

    def start(self) -> None:
        """Start the live display."""
        self._live = Live(
            self._build_panel(),
            console=self.console,
            refresh_per_second=1 / self.refresh_rate,
            transient=False,
        )
        self._live.start()

    def update(self, status: RunStatus) -> None:
        """Record a status snapshot and redraw."""
        if self._baseline is None:
            self._baseline = status.completed_count
        self.status = status
        if self._live:
            self._live.update(self._build_panel())

    def stop(self) -> None:
        """Stop the live display."""
        if self._live:
            self._live.stop()
            self._live = None

    def __enter__(self) -> "TranslationProgressDisplay":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def print_run_summary(
    statistics: RunStatistics,
    title: str = "Translation",
    console: Optional[Console] = None,
) -> None:
    """Print the end-of-run statistics as a panel."""
    console = console or Console()

    summary_table = Table(show_header=False, box=None)
    summary_table.add_column("Metric", style="bold")
    summary_table.add_column("Value")

    summary_table.add_row("Total Terms", str(statistics.total))
    summary_table.add_row("Completed", f"[green]{statistics.completed}[/green]")
    if statistics.failed_terms > 0:
        summary_table.add_row("Terms with Fallback", f"[yellow]{statistics.failed_terms}[/yellow]")
        summary_table.add_row("Failed Translations", f"[red]{statistics.failed}[/red]")
    summary_table.add_row("Success Rate", f"{statistics.success_rate:.1f}%")

    console.print(Panel(
        summary_table,
        title=f"[bold]{title} Complete[/bold]",
        border_style="green" if statistics.failed == 0 else "yellow",
    ))


def print_validation_summary(result, console: Optional[Console] = None) -> None:
    """Print the status line and statistics of a ValidationResult."""
    console = console or Console()
    stats = result.statistics

    summary_table = Table(show_header=False, box=None)
    summary_table.add_column("Metric", style="bold")
    summary_table.add_column("Value")

    summary_table.add_row(
        "Status", "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
    )
    summary_table.add_row("Errors", str(len(result.errors)))
    summary_table.add_row("Warnings", str(len(result.warnings)))
    summary_table.add_row("Total Words", str(stats.total_words))
    summary_table.add_row("Translated Words", str(stats.translated_words))
    summary_table.add_row("Completion Rate", f"{stats.completion_rate:.1f}%")

    console.print(Panel(
        summary_table,
        title="[bold]Validation[/bold]",
        border_style="green" if result.is_valid else "red",
    ))
