"""List command implementation."""

import click
from rich.console import Console

from scriptbay.cli.json_output import (
    CatalogResponse,
    CategoryModel,
    EntryModel,
    emit_json,
    json_error_boundary,
)
from scriptbay.cli.output import user_output
from scriptbay.cli.rendering import build_catalog_table
from scriptbay.core.context import AppContext


@click.command("list")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
@click.pass_obj
@json_error_boundary
def list_cmd(ctx: AppContext, output_format: str) -> None:
    """List available scripts grouped by category."""
    scripts_dir = ctx.config.scripts_dir
    categories = ctx.catalog.scan(scripts_dir)

    if output_format == "json":
        emit_json(
            CatalogResponse(
                scripts_dir=str(scripts_dir),
                categories=[
                    CategoryModel(
                        name=category.name,
                        entries=[
                            EntryModel(
                                name=entry.display_name,
                                qualified_name=entry.qualified_name,
                                path=str(entry.path),
                                has_undo=entry.has_undo,
                            )
                            for entry in category.entries
                        ],
                    )
                    for category in categories
                ],
            )
        )
        return

    if not categories:
        user_output(f"No scripts found in {scripts_dir}")
        return

    Console().print(build_catalog_table(categories))
