"""diffgate CLI."""

import click

from diffgate.cli.filter import filter_command
from diffgate.cli.lines import lines_command
from diffgate.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="diffgate")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """diffgate - restrict lint findings to the lines a change introduced."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    # Until a command loads the repository config and its logging section
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(lines_command, name="lines")
cli.add_command(filter_command, name="filter")


if __name__ == "__main__":
    cli()
