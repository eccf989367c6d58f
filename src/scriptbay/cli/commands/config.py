"""Config command group implementation."""

import click

from scriptbay.cli.ensure import Ensure
from scriptbay.cli.output import machine_output, user_output
from scriptbay.core.config import CONFIG_FILE_NAME, AppConfig, save_config
from scriptbay.core.context import AppContext


@click.group("config")
def config_group() -> None:
    """Inspect or create scriptbay.toml."""


@config_group.command("show")
@click.pass_obj
def show_cmd(ctx: AppContext) -> None:
    """Print the effective configuration."""
    cfg = ctx.config
    machine_output(f"root = {cfg.root}")
    machine_output(f"scripts_dir = {cfg.scripts_dir}")
    machine_output(f"logs_dir = {cfg.logs_dir}")
    machine_output(f"script_extension = {cfg.script_extension}")
    machine_output(f"interpreter = {' '.join(cfg.interpreter)}")
    machine_output(f"confirm_runs = {str(cfg.confirm_runs).lower()}")
    machine_output(f"warn_if_not_admin = {str(cfg.warn_if_not_admin).lower()}")


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing scriptbay.toml.")
@click.pass_obj
def init_cmd(ctx: AppContext, force: bool) -> None:
    """Write a scriptbay.toml with default settings to the app root."""
    root = ctx.config.root
    cfg_path = root / CONFIG_FILE_NAME
    Ensure.invariant(
        force or not cfg_path.exists(),
        f"{cfg_path} already exists (use --force to overwrite)",
    )
    defaults = AppConfig.defaults(root)
    written = save_config(defaults)
    defaults.scripts_dir.mkdir(parents=True, exist_ok=True)
    ctx.audit_log.log(f"Wrote config: {written}")
    user_output(click.style("✓ ", fg="green") + f"Wrote {written}")
