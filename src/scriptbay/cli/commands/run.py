"""Run command implementation."""

import click

from scriptbay.cli.commands.batch_helpers import (
    ABORTED_STATUS,
    NO_SELECTION_STATUS,
    confirmation_for,
    end_without_batch,
    execute_batch,
    select_entries,
)
from scriptbay.cli.ensure import Ensure
from scriptbay.cli.json_output import json_error_boundary
from scriptbay.core.catalog import iter_entries
from scriptbay.core.context import AppContext

NOT_ADMIN_PROMPT = "Not running as administrator. Some scripts may fail. Continue?"
CONFIRM_RUN_PROMPT = "Run the selected scripts? This will execute local scripts."
CONFIRM_RUN_ALL_PROMPT = "Run ALL available scripts? This will execute local scripts."


@click.command("run")
@click.argument("names", nargs=-1, metavar="[NAME]...")
@click.option("--all", "run_all", is_flag=True, help="Run every script in the catalog.")
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
def run_cmd(
    ctx: AppContext, names: tuple[str, ...], run_all: bool, yes: bool, output_format: str
) -> None:
    """Run scripts one after another.

    NAME is either CATEGORY/SCRIPT or a script name that is unique across
    categories. Scripts run in catalog order. A failing script does not stop
    the remaining ones; the command exits with status 1 if any script failed.
    """
    Ensure.invariant(not (run_all and names), "--all cannot be combined with script names")

    categories = ctx.catalog.scan(ctx.config.scripts_dir)
    if run_all:
        entries = iter_entries(categories)
        prompt = CONFIRM_RUN_ALL_PROMPT
    else:
        entries = select_entries(categories, names, output_format)
        prompt = CONFIRM_RUN_PROMPT

    if not entries:
        end_without_batch(NO_SELECTION_STATUS, "No scripts selected.", output_format)
        return

    confirmation = confirmation_for(ctx, yes)
    if ctx.config.warn_if_not_admin and not ctx.privileges.is_elevated():
        if not confirmation.confirm(NOT_ADMIN_PROMPT):
            end_without_batch(ABORTED_STATUS, "Aborted.", output_format)
            return

    if ctx.config.confirm_runs and not confirmation.confirm(prompt):
        end_without_batch(ABORTED_STATUS, "Aborted.", output_format)
        return

    report = execute_batch(ctx, entries, output_format)
    if not report.succeeded:
        raise SystemExit(1)
