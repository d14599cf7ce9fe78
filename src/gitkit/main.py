"""CLI entry point for gitkit.

A thin Click wrapper around :class:`~gitkit.service.GitService` for manual
use. Every command prints its result as JSON on stdout; logs go to stderr.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, TypeVar

import click

from gitkit import __version__
from gitkit.config import GitkitConfig, load_config
from gitkit.exceptions import ConfigError, GitkitError
from gitkit.git.context import OperationContext
from gitkit.git.models import DiffOptions, LogOptions, StatusOptions
from gitkit.logging import bind_context, configure_logging
from gitkit.service import GitService

F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, Any]])

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def async_command(f: F) -> Callable[..., Any]:
    """Run an async Click command with asyncio.run()."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def _resolve_log_level(config: GitkitConfig, verbose: int, quiet: bool) -> int:
    # Priority: quiet > verbose > config
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return logging.INFO if verbose == 1 else logging.DEBUG
    return _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)


def _emit(result: Any) -> None:
    click.echo(json.dumps(result.to_dict(), indent=2, default=str))


async def _run(ctx: click.Context, name: str, options: Any) -> None:
    service: GitService = ctx.obj["service"]
    context: OperationContext = ctx.obj["context"]
    bind_context(operation=name, **context.log_fields())
    try:
        result = await service.execute(name, options, context)
    except GitkitError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(1)
    _emit(result)


@click.group()
@click.version_option(version=__version__, prog_name="gitkit")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./gitkit.yaml).",
)
@click.option(
    "-C",
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository directory (defaults to the current directory).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Only log errors.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    cwd: Path | None,
    verbose: int,
    quiet: bool,
) -> None:
    """gitkit - structured access to the git CLI."""
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_file) if config_file else None)
    except ConfigError as e:
        # Logging is not configured yet
        error_parts = [f"Error: {e.message}"]
        if e.field:
            error_parts.append(f"  Field: {e.field}")
        if e.value is not None:
            error_parts.append(f"  Value: {e.value}")
        click.echo("\n".join(error_parts), err=True)
        ctx.exit(1)

    configure_logging(level=_resolve_log_level(config, verbose, quiet))

    ctx.obj["config"] = config
    ctx.obj["service"] = GitService.from_config(config)
    ctx.obj["context"] = OperationContext(
        working_directory=(cwd or Path.cwd()).resolve()
    )


@cli.command()
@click.option("--staged", is_flag=True, help="Compare the index against HEAD.")
@click.option("--name-only", is_flag=True, help="Only list changed paths.")
@click.option("--stat", is_flag=True, help="Return the --stat summary.")
@click.option(
    "-U",
    "--unified",
    type=click.IntRange(min=0),
    default=None,
    help="Context lines around each hunk.",
)
@click.option(
    "--include-untracked", is_flag=True, help="Report untracked files as new."
)
@click.argument("commits", nargs=-1)
@click.option(
    "-p",
    "--path",
    "paths",
    multiple=True,
    help="Restrict to a path (repeatable).",
)
@click.pass_context
@async_command
async def diff(
    ctx: click.Context,
    staged: bool,
    name_only: bool,
    stat: bool,
    unified: int | None,
    include_untracked: bool,
    commits: tuple[str, ...],
    paths: tuple[str, ...],
) -> None:
    """Show changes, optionally between up to two COMMITS."""
    if len(commits) > 2:
        raise click.UsageError("diff accepts at most two commits")
    options = DiffOptions(
        staged=staged,
        name_only=name_only,
        unified=unified,
        commit1=commits[0] if commits else None,
        commit2=commits[1] if len(commits) > 1 else None,
        stat=stat,
        paths=paths,
        include_untracked=include_untracked,
    )
    await _run(ctx, "diff", options)


@cli.command()
@click.option(
    "--no-untracked", is_flag=True, help="Leave untracked files out of the report."
)
@click.pass_context
@async_command
async def status(ctx: click.Context, no_untracked: bool) -> None:
    """Show the working tree status."""
    await _run(ctx, "status", StatusOptions(include_untracked=not no_untracked))


@cli.command()
@click.option(
    "-n",
    "--max-count",
    type=click.IntRange(min=0),
    default=20,
    show_default=True,
    help="Number of commits to show.",
)
@click.argument("ref", required=False)
@click.pass_context
@async_command
async def log(ctx: click.Context, max_count: int, ref: str | None) -> None:
    """Show commit history, starting at REF (default HEAD)."""
    await _run(ctx, "log", LogOptions(max_count=max_count, ref=ref))


if __name__ == "__main__":
    cli()
