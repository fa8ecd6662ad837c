"""diffgate filter command - keep diagnostics that sit on changed lines."""

import json
from pathlib import Path
from typing import IO

import click

from diffgate.cli.utils import cli_errors, find_repo_root, load_cli_config
from diffgate.lint.models import Diagnostic
from diffgate.lint.ops import build_diff, filter_diagnostics


def _read_diagnostics(stream: IO[str]) -> list[Diagnostic]:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Diagnostics input is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise click.ClickException("Diagnostics input must be a JSON array")
    try:
        return [Diagnostic.from_dict(item) for item in payload]
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid diagnostic: {e}") from e


@click.command()
@click.argument("old")
@click.argument("new", default="HEAD")
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository root (default: discovered from the current directory)",
)
@click.option(
    "--staged/--no-staged", default=None, help="Diff staged content against OLD instead of NEW"
)
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    help="JSON array of diagnostics (default: stdin)",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None)
def filter_command(
    old: str,
    new: str,
    repo_path: Path | None,
    staged: bool | None,
    input_file: IO[str],
    config_path: Path | None,
) -> None:
    """Print only the diagnostics reported on lines changed between OLD and NEW.

    Diagnostics are JSON objects with at least "path", "line" and "message";
    relative paths are taken relative to the repository root.
    """
    repo_root = find_repo_root(repo_path)
    config = load_cli_config(repo_root, config_path, include_staged=staged).diff
    diagnostics = _read_diagnostics(input_file)

    with cli_errors():
        line_filter = build_diff(repo_root, old, new, config.include_staged, config=config)

    kept = filter_diagnostics(diagnostics, line_filter)
    click.echo(json.dumps([d.to_dict() for d in kept], indent=2))
