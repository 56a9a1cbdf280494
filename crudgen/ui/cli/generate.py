"""
CLI commands for project generation.

Thin wrappers over ``crudgen.core.use_cases.generate``.  All error
handling for a run happens here: any ``CrudGenError`` is reported once
and mapped to its exit code.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from crudgen.adapters.base import ModelClient
from crudgen.adapters.ollama import OllamaClient
from crudgen.core.config.loader import ConfigError, Settings, load_settings
from crudgen.core.errors import CrudGenError, SelectionCancelled
from crudgen.core.models.request import Database, GenerationRequest, Language

_LANGUAGES = [lang.value for lang in Language]
_DATABASES = [db.value for db in Database]


def build_client(settings: Settings) -> ModelClient:
    """Create the model client used for both generation stages."""
    return OllamaClient(endpoint=settings.endpoint, timeout=settings.timeout)


def _load_settings(ctx: click.Context, as_json: bool) -> Settings:
    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        _report({"ok": False, "kind": "ConfigError", "stage": "config", "error": str(e)}, as_json)
        sys.exit(1)


def _report(data: dict, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(data, indent=2))
    elif data.get("kind") == SelectionCancelled.__name__:
        click.secho(f"⚠️  {data['error']}", fg="yellow", err=True)
    else:
        click.secho(f"❌ [{data['stage']}] {data['error']}", fg="red", err=True)


def _fail(error: CrudGenError, as_json: bool) -> None:
    _report(error.to_dict(), as_json)
    sys.exit(error.exit_code)


# ── Interactive prompts ─────────────────────────────────────────


def _choose(text: str, choices: list[str], cancelled: str, err: bool) -> str:
    try:
        return click.prompt(
            text,
            type=click.Choice(choices, case_sensitive=False),
            err=err,
        )
    except click.Abort:
        raise SelectionCancelled(cancelled) from None


def _describe(err: bool) -> str:
    try:
        value = click.prompt(
            "What should the API do? (e.g., manage users, handle products)",
            default="",
            show_default=False,
            err=err,
        )
    except click.Abort:
        raise SelectionCancelled("API description was cancelled.") from None
    if not value.strip():
        raise SelectionCancelled("API description was cancelled.")
    return value.strip()


def collect_request(
    language: str | None,
    database: str | None,
    description: str | None,
    err: bool = False,
) -> GenerationRequest:
    """Ask for whatever the command line didn't supply, in a fixed order.

    Raises:
        SelectionCancelled: A prompt was dismissed (Ctrl-C, EOF, empty answer).
    """
    if language is None:
        language = _choose(
            "Select a programming language", _LANGUAGES,
            "Language selection was cancelled.", err,
        )
    if database is None:
        database = _choose(
            "Select a database", _DATABASES,
            "Database selection was cancelled.", err,
        )
    if description is None:
        description = _describe(err)
    elif not description.strip():
        raise SelectionCancelled("API description was cancelled.")

    return GenerationRequest(
        language=Language(language),
        database=Database(database),
        description=description,
    )


def _echo_written(root: Path, written: list[str]) -> None:
    for rel in written:
        click.echo(f"   📄 {rel}")
    click.echo(f"   → {root}")


# ── Commands ────────────────────────────────────────────────────


@click.command()
@click.option("--language", "-l", type=click.Choice(_LANGUAGES, case_sensitive=False),
              default=None, help="Target language (skips the prompt).")
@click.option("--database", "-d", type=click.Choice(_DATABASES, case_sensitive=False),
              default=None, help="Database (skips the prompt).")
@click.option("--description", "-m", default=None,
              help="What the API should do (skips the prompt).")
@click.option("--root", "-r", type=click.Path(path_type=Path), default=None,
              help="Directory to generate into (default: workspace root).")
@click.option("--raw-dir", type=click.Path(path_type=Path), default=None,
              help="Save both raw model replies into this directory.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    language: str | None,
    database: str | None,
    description: str | None,
    root: Path | None,
    raw_dir: Path | None,
    as_json: bool,
) -> None:
    """Generate a CRUD API project from a plain-English description."""
    from crudgen.core.services.workspace import resolve_workspace
    from crudgen.core.use_cases.generate import run_generate

    settings = _load_settings(ctx, as_json)
    quiet = ctx.obj.get("quiet", False) or as_json

    def progress(message: str) -> None:
        if not quiet:
            click.secho(f"💡 {message}", fg="cyan")

    try:
        workspace = resolve_workspace(root, settings)
        request = collect_request(language, database, description, err=as_json)
        result = run_generate(
            request,
            workspace,
            build_client(settings),
            settings=settings,
            on_progress=progress,
            raw_dir=raw_dir,
        )
    except CrudGenError as e:
        _fail(e, as_json)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.written:
        click.secho("⚠️  The model returned no file blocks; nothing was written.", fg="yellow")
        return

    click.secho("✅ CRUD API project generated successfully!", fg="green", bold=True)
    if not quiet:
        _echo_written(result.root, result.written)


@click.command()
@click.argument("response_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--root", "-r", type=click.Path(path_type=Path), default=None,
              help="Directory to write into (default: workspace root).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def materialize(ctx: click.Context, response_file: Path, root: Path | None, as_json: bool) -> None:
    """Write the file blocks of a saved model reply (no model calls)."""
    from crudgen.core.services.workspace import resolve_workspace
    from crudgen.core.use_cases.generate import write_response

    settings = _load_settings(ctx, as_json)

    try:
        text = response_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.FileError(str(response_file), hint=str(e)) from e

    try:
        workspace = resolve_workspace(root, settings)
        blocks, written = write_response(text, workspace)
    except CrudGenError as e:
        _fail(e, as_json)
        return

    if as_json:
        data = written.to_dict()
        data["block_count"] = len(blocks)
        click.echo(json.dumps(data, indent=2))
        return

    if not written.written:
        click.secho("⚠️  No file blocks found; nothing was written.", fg="yellow")
        return

    click.secho(f"✅ Wrote {len(written.written)} file(s)", fg="green", bold=True)
    if not ctx.obj.get("quiet", False):
        _echo_written(workspace, written.written)
