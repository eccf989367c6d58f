"""Undo command implementation."""

import click

from scriptbay.cli.commands.batch_helpers import (
    ABORTED_STATUS,
    NO_SELECTION_STATUS,
    NOTHING_TO_UNDO_STATUS,
    confirmation_for,
    end_without_batch,
    execute_batch,
    select_entries,
)
from scriptbay.cli.json_output import json_error_boundary
from scriptbay.cli.output import user_output
from scriptbay.core.catalog import resolve_undo_batch
from scriptbay.core.context import AppContext

CONFIRM_UNDO_PROMPT = "Run undo scripts for the selected scripts?"


@click.command("undo")
@click.argument("names", nargs=-1, metavar="[NAME]...")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_obj
@json_error_boundary
def undo_cmd(ctx: AppContext, names: tuple[str, ...], yes: bool, output_format: str) -> None:
    """Run the undo counterparts of the named scripts.

    The undo script of SCRIPT is SCRIPT.undo<ext> or, failing that,
    SCRIPT-undo<ext> in the same folder. Scripts without one are skipped.
    """
    categories = ctx.catalog.scan(ctx.config.scripts_dir)
    entries = select_entries(categories, names, output_format)
    if not entries:
        end_without_batch(NO_SELECTION_STATUS, "No scripts selected.", output_format)
        return

    undo_batch = resolve_undo_batch(entries)
    if undo_batch.nothing_to_undo:
        end_without_batch(
            NOTHING_TO_UNDO_STATUS, "No undo scripts found for the selected scripts.", output_format
        )
        return

    for entry in undo_batch.skipped:
        user_output(f"No undo script for {entry.qualified_name}, skipping")

    confirmation = confirmation_for(ctx, yes)
    if ctx.config.confirm_runs and not confirmation.confirm(CONFIRM_UNDO_PROMPT):
        end_without_batch(ABORTED_STATUS, "Aborted.", output_format)
        return

    report = execute_batch(ctx, undo_batch.items, output_format)
    if not report.succeeded:
        raise SystemExit(1)
