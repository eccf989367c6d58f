from pathlib import Path

import click

from scriptbay.cli.commands.config import config_group
from scriptbay.cli.commands.list_cmd import list_cmd
from scriptbay.cli.commands.logs import logs_cmd
from scriptbay.cli.commands.run import run_cmd
from scriptbay.cli.commands.undo import undo_cmd
from scriptbay.cli.ensure import Ensure
from scriptbay.core.config import ConfigError
from scriptbay.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="scriptbay")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="App folder holding scripts/, logs/ and scriptbay.toml "
    "(default: $SCRIPTBAY_ROOT or the current directory).",
)
@click.pass_context
def cli(ctx: click.Context, root: Path | None) -> None:
    """Run local scripts grouped by category, with optional undo scripts."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(root=root)
        except ConfigError as e:
            Ensure.fail(str(e))


cli.add_command(config_group)
cli.add_command(list_cmd)
cli.add_command(logs_cmd)
cli.add_command(run_cmd)
cli.add_command(undo_cmd)


def main() -> None:
    """CLI entry point used by the `scriptbay` console script."""
    cli()
