"""Output routing for CLI commands.

Human-facing messages go to stderr through user_output(); data meant for other
programs (JSON documents) goes to stdout through machine_output().
"""

import click


def user_output(message: str = "") -> None:
    """Print a message for the person at the terminal (stderr)."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Print machine-readable data (stdout)."""
    click.echo(message)
