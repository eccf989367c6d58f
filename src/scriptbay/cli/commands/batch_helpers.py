"""Shared plumbing for commands that execute batches."""

from collections.abc import Sequence

from rich.console import Console

from scriptbay.cli.ensure import Ensure
from scriptbay.cli.json_output import (
    BatchResponse,
    NoBatchResponse,
    ScriptRunModel,
    emit_json,
    emit_json_error,
)
from scriptbay.cli.output import user_output
from scriptbay.cli.rendering import TerminalBatchListener, format_batch_summary
from scriptbay.core.batch_runner import (
    BatchAlreadyRunningError,
    BatchItem,
    BatchReport,
    CancellationToken,
)
from scriptbay.core.catalog import ScriptCategory, ScriptEntry
from scriptbay.core.confirmation import AssumeYesConfirmation, ConfirmationPort
from scriptbay.core.context import AppContext
from scriptbay.core.selection import ScriptNameError, select_by_names

WAIT_POLL_SECONDS = 0.2
NO_SELECTION_STATUS = "no_selection"
NOTHING_TO_UNDO_STATUS = "nothing_to_undo"
ABORTED_STATUS = "aborted"


def end_without_batch(status: str, message: str, output_format: str) -> None:
    """Tell the user why nothing ran; in json mode also print a NoBatchResponse."""
    user_output(message)
    if output_format == "json":
        emit_json(NoBatchResponse(status=status, message=message))


def confirmation_for(ctx: AppContext, yes: bool) -> ConfirmationPort:
    """Return the port that answers this command's prompts."""
    if yes:
        return AssumeYesConfirmation()
    return ctx.confirmation


def select_entries(
    categories: Sequence[ScriptCategory], names: Sequence[str], output_format: str
) -> list[ScriptEntry]:
    """Resolve user-supplied names to entries, in catalog order."""
    try:
        selection = select_by_names(categories, names)
    except ScriptNameError as e:
        if output_format == "json":
            emit_json_error(str(e), type(e).__name__)
        Ensure.fail(str(e))
    return selection.selected_entries(categories)


def _wait_for_batch(
    ctx: AppContext, entries: Sequence[ScriptEntry], console: Console
) -> BatchReport:
    items = [BatchItem.from_entry(entry) for entry in entries]
    listener = TerminalBatchListener(console, total=len(items))
    cancel = CancellationToken()
    try:
        handle = ctx.runner.start_batch(items, listener, cancel)
    except BatchAlreadyRunningError as e:
        Ensure.fail(str(e))

    while True:
        try:
            report = handle.wait(timeout=WAIT_POLL_SECONDS)
        except KeyboardInterrupt:
            if not cancel.is_cancelled:
                cancel.cancel()
                user_output("Cancelling after the current script finishes...")
            continue
        if report is not None:
            return report


def execute_batch(
    ctx: AppContext, entries: Sequence[ScriptEntry], output_format: str
) -> BatchReport:
    """Run entries through the batch runner and render the outcome.

    In text mode, events stream to stdout and a summary panel follows. In json
    mode, events stream to stderr and a BatchResponse document is printed on
    stdout once the batch is over.
    """
    if output_format == "json":
        report = _wait_for_batch(ctx, entries, Console(stderr=True))
        emit_json(
            BatchResponse(
                status=report.final_status,
                succeeded=report.succeeded,
                cancelled=report.cancelled,
                total=report.total,
                completed=report.completed,
                duration_seconds=report.duration_seconds,
                results=[
                    ScriptRunModel(
                        name=item.display_name,
                        path=str(item.path),
                        exit_code=result.exit_code,
                        output=result.combined_output,
                    )
                    for item, result in report.results
                ],
            )
        )
        return report

    console = Console()
    report = _wait_for_batch(ctx, entries, console)
    console.print(format_batch_summary(report))
    return report
