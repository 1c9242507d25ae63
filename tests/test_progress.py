from __future__ import annotations

from datetime import datetime, timedelta

from rich.console import Console

from iso24765_translator.translation.status import RunStatistics, RunStatus
from iso24765_translator.utils.progress import (
    TranslationProgressDisplay,
    estimate_remaining,
    format_duration,
    print_run_summary,
)


def test_format_duration():
    assert format_duration(None) == "00:00:00"
    assert format_duration(timedelta(hours=1, minutes=2, seconds=3)) == "01:02:03"


def test_estimate_remaining_ignores_resumed_terms():
    status = RunStatus(
        total=300,
        completed_count=200,
        start_time=datetime.now() - timedelta(seconds=100),
    )

    remaining = estimate_remaining(status, baseline=100)

    assert 95 <= remaining.total_seconds() <= 105


def test_display_records_first_snapshot_as_baseline():
    console = Console(record=True, width=100)
    display = TranslationProgressDisplay(console=console)

    display.update(RunStatus(total=10, completed_count=4, start_time=datetime.now()))
    display.update(RunStatus(total=10, completed_count=6, errors=["3.1 [name]: boom (attempts: 3)"]))

    assert display.status.completed_count == 6
    console.print(display._build_panel())
    output = console.export_text()
    assert "(6/10)" in output
    assert "3.1 [name]: boom" in output


def test_print_run_summary():
    console = Console(record=True, width=100)
    stats = RunStatistics(
        total=4, completed=4, failed=2, failed_terms=1,
        success_rate=75.0, errors=[], error_count=2,
    )

    print_run_summary(stats, console=console)

    output = console.export_text()
    assert "Success Rate" in output
    assert "75.0%" in output
