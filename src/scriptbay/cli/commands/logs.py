"""Logs command implementation."""

import click

from scriptbay.cli.output import machine_output
from scriptbay.core.context import AppContext


@click.command("logs")
@click.option("--dir", "show_dir", is_flag=True, help="Print the logs folder instead.")
@click.pass_obj
def logs_cmd(ctx: AppContext, show_dir: bool) -> None:
    """Print the path of this session's audit log."""
    if show_dir:
        machine_output(str(ctx.config.logs_dir))
        return
    log_path = ctx.audit_log.log_path
    machine_output(str(log_path) if log_path is not None else "")
