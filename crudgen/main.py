"""
crudgen — CLI entrypoint.

Usage:
    python -m crudgen.main --help
    python -m crudgen.main generate
    python -m crudgen.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from crudgen import __version__
from crudgen.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="crudgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to crudgen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """crudgen — generate a CRUD API project with a local LLM."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # Default workspace: the directory holding crudgen.yml, else cwd
    from crudgen.core.config.loader import find_config_file
    from crudgen.core.context import set_workspace_root

    _cfg = ctx.obj["config_path"] or find_config_file()
    set_workspace_root(_cfg.parent.resolve() if _cfg else Path.cwd())

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("CRUDGEN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("CRUDGEN_LOG_FILE"),
        log_file_level=os.environ.get("CRUDGEN_LOG_FILE_LEVEL"),
    )


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate crudgen.yml and show the effective settings."""
    from crudgen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        settings = result.settings
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Config:    {result.config_path or '(defaults)'}")
        click.echo(f"   Endpoint:  {settings.endpoint}")
        click.echo(f"   Interpret: {settings.interpret_model}")
        click.echo(f"   Generate:  {settings.generate_model}")
        click.echo(f"   Timeout:   {settings.timeout or 'none'}")
        if settings.workspace:
            click.echo(f"   Workspace: {settings.workspace}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


# ── Register commands from crudgen/ui/cli/ ──────────────────────

from crudgen.ui.cli.generate import generate, materialize

cli.add_command(generate)
cli.add_command(materialize)


if __name__ == "__main__":
    cli()
