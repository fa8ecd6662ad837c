"""CLI utilities."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click
import structlog

from diffgate.config.loader import load_config
from diffgate.config.models import DiffGateConfig
from diffgate.core.errors import ConfigError, DiffGateError, OperationError
from diffgate.core.logging import configure_logging, get_log_file_path
from diffgate.git.errors import GitError

log = structlog.get_logger(__name__)


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git entry.
    If start_path is None, uses the current working directory.
    Symlinks in start_path are kept so changed-line keys match the
    caller's paths.

    Raises:
        click.ClickException: If not inside a git repository
    """
    if start_path is None:
        start_path = Path.cwd()

    current = Path(os.path.abspath(start_path))

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    if (current / ".git").exists():
        return current

    raise click.ClickException(f"Not inside a git repository: {start_path}")


def load_cli_config(
    repo_root: Path,
    config_path: Path | None,
    **overrides: Any,
) -> DiffGateConfig:
    """Load config with the diff overrides that were actually given, then apply its logging.

    ``-v`` on the group raises the configured log level to DEBUG.
    """
    diff_overrides = {k: v for k, v in overrides.items() if v is not None}
    with cli_errors():
        config = load_config(
            repo_root,
            config_path=config_path,
            **({"diff": diff_overrides} if diff_overrides else {}),
        )

    logging_config = config.logging
    ctx = click.get_current_context(silent=True)
    options = ctx.find_object(dict) if ctx is not None else None
    if options and options.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def _error_message(err: DiffGateError) -> str:
    log.debug("command_failed", **err.to_dict())
    log_file = get_log_file_path()
    if log_file is not None:
        return f"{err}. See {log_file} for details."
    return str(err)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Report config and git failures as click errors (exit code 1)."""
    try:
        yield
    except ConfigError as e:
        raise click.ClickException(_error_message(e)) from e
    except GitError as e:
        raise click.ClickException(_error_message(OperationError.from_exception(e))) from e
