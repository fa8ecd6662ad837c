"""diffgate lines command - show the changed line ranges of a revision pair."""

import json
from pathlib import Path

import click

from diffgate.cli.utils import cli_errors, find_repo_root, load_cli_config
from diffgate.diff.algorithms import ALGORITHMS
from diffgate.diff.engine import DiffEngine
from diffgate.diff.models import DiffEntryWrapper, EditType
from diffgate.git.store import GitRevisionStore


def _line_ranges(entry: DiffEntryWrapper) -> list[tuple[int, int]]:
    """1-based inclusive ranges of added or modified lines."""
    return [
        (e.begin_new + 1, e.end_new)
        for e in entry.edits
        if e.type in (EditType.INSERT, EditType.REPLACE)
    ]


def _format_ranges(ranges: list[tuple[int, int]]) -> str:
    return ", ".join(str(a) if a == b else f"{a}-{b}" for a, b in ranges)


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
    "--algorithm",
    type=click.Choice(sorted(ALGORITHMS)),
    default=None,
    help="Line diff algorithm",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def lines_command(
    old: str,
    new: str,
    repo_path: Path | None,
    staged: bool | None,
    algorithm: str | None,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Show added/modified line ranges between OLD and NEW (default: HEAD)."""
    repo_root = find_repo_root(repo_path)
    config = load_cli_config(
        repo_root, config_path, algorithm=algorithm, include_staged=staged
    ).diff

    with cli_errors():
        engine = DiffEngine.from_config(GitRevisionStore(repo_root), config)
        entries = engine.run(old, new, config.include_staged)

    if as_json:
        files = [
            {
                "path": entry.change.path,
                "old_path": entry.change.old_path,
                "change": entry.change.change_type.value,
                "delete_only": entry.is_delete_only,
                "ranges": [list(r) for r in _line_ranges(entry)],
            }
            for entry in entries
        ]
        click.echo(json.dumps({"old": old, "new": new, "files": files}, indent=2))
        return

    if not entries:
        click.echo("No changes.")
        return

    for entry in entries:
        change = entry.change.change_type.value
        if entry.is_delete_only:
            click.echo(f"{entry.change.path} ({change}): no added lines")
            continue
        ranges = _line_ranges(entry)
        shown = _format_ranges(ranges) if ranges else "no line changes"
        click.echo(f"{entry.change.path} ({change}): {shown}")
