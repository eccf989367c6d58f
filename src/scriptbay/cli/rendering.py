"""Terminal rendering for catalogs and batch runs."""

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scriptbay.core.batch_runner import BatchListener, BatchReport
from scriptbay.core.catalog import ScriptCategory


def format_duration(seconds: float) -> str:
    """Format seconds as a short human string.

    Example:
        >>> format_duration(83.2)
        '1m 23s'
    """
    if seconds < 1:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes == 0:
        return f"{secs}s"
    return f"{minutes}m {secs}s"


def build_catalog_table(categories: Sequence[ScriptCategory]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("category", style="cyan", no_wrap=True)
    table.add_column("script", no_wrap=True)
    table.add_column("undo", no_wrap=True)
    for category in categories:
        for entry in category.entries:
            undo = Text("undo available", style="green") if entry.has_undo else Text("")
            table.add_row(category.name, entry.display_name, undo)
    return table


class TerminalBatchListener(BatchListener):
    """Prints batch events to a rich Console as they arrive.

    Visual output format:
    - Status: `Running: name` (bold)
    - Script output: as-is, no markup interpretation
    - Progress: `  [2/5] 40%` (dim)
    - End: `--- Done (1m 23s) ---` (green), or red when something failed
    """

    def __init__(self, console: Console, total: int) -> None:
        self._console = console
        self._total = total

    def on_status(self, text: str) -> None:
        self._console.print(text, style="bold", markup=False, highlight=False)

    def on_output_append(self, text: str) -> None:
        self._console.print(text.rstrip("\n"), markup=False, highlight=False)

    def on_progress(self, fraction: float) -> None:
        done = round(fraction * self._total)
        self._console.print(f"  [{done}/{self._total}] {fraction:.0%}", style="dim", markup=False)

    def on_batch_end(self, report: BatchReport) -> None:
        style = "green" if report.succeeded else "red"
        duration = format_duration(report.duration_seconds)
        self._console.print(f"--- {report.final_status} ({duration}) ---", style=style)


def format_batch_summary(report: BatchReport) -> Panel:
    """Format final summary box with per-script failures and timing."""
    lines: list[Text] = []
    if report.succeeded:
        lines.append(Text(f"Status: all {report.total} script(s) succeeded", style="green"))
    elif report.cancelled:
        lines.append(
            Text(f"Status: cancelled after {report.completed} of {report.total}", style="yellow")
        )
    else:
        lines.append(
            Text(f"Status: {len(report.failed)} of {report.total} script(s) failed", style="red")
        )

    lines.append(Text(f"Duration: {format_duration(report.duration_seconds)}"))

    for item, result in report.failed:
        lines.append(Text(f"{item.display_name}: exit code {result.exit_code}", style="red"))

    border = "green" if report.succeeded else "red"
    content = Text("\n").join(lines)
    return Panel(content, title="Batch Complete", border_style=border, padding=(1, 2))
