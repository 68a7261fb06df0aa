"""puppet-check CLI - Main entry point."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from puppetcheck import __version__
from puppetcheck.checkers.base import CheckerToolError
from puppetcheck.config import load_config, split_args
from puppetcheck.errors import PuppetCheckError
from puppetcheck.logging import configure_logging
from puppetcheck.reporter import render
from puppetcheck.runner import PuppetCheckRunner

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # No files found, invalid configuration
EXIT_CONTENT_ERRORS = 2  # The report contains files with errors
EXIT_TOOL_ERROR = 3  # A checker could not run its external tool

app = typer.Typer(
    name="puppet-check",
    help="Validate Puppet manifests, templates, Ruby and data files in one pass.",
    add_completion=False,
)

err_console = Console(stderr=True)


def _exit_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print error and exit."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=exit_code)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"puppet-check version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: list[str] = typer.Argument(
        ...,
        help="Files and directories to check.",
    ),
    future: bool | None = typer.Option(
        None,
        "--future/--no-future",
        help="Validate manifests with the future parser.",
    ),
    style: bool | None = typer.Option(
        None,
        "--style/--no-style",
        help="Run puppet-lint and rubocop on files that parse.",
    ),
    puppet_lint: str | None = typer.Option(
        None,
        "--puppet-lint",
        help="Extra arguments for puppet-lint, e.g. '--no-140chars-check'.",
    ),
    rubocop: str | None = typer.Option(
        None,
        "--rubocop",
        help="Extra arguments for rubocop, e.g. '--only Lint'.",
    ),
    follow_symlinks: bool | None = typer.Option(
        None,
        "--follow-symlinks",
        help="Descend into symlinked directories.",
    ),
    include_hidden: bool | None = typer.Option(
        None,
        "--include-hidden",
        help="Check dot-files and files in dot-directories.",
    ),
    parallel: bool | None = typer.Option(
        None,
        "--parallel",
        help="Run the checkers for each file type concurrently.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log discovery and dispatch details to stderr.",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Check every file under PATHS and print a categorized report."""
    configure_logging(verbose=verbose)

    try:
        config = load_config(
            {
                "future_parser": future,
                "style_check": style,
                "puppetlint_args": split_args(puppet_lint) if puppet_lint is not None else None,
                "rubocop_args": split_args(rubocop) if rubocop is not None else None,
                "follow_symlinks": follow_symlinks,
                "include_hidden": include_hidden,
                "parallel": parallel,
            }
        )
    except ValueError as e:
        _exit_error(f"Invalid configuration: {e}")

    try:
        store = PuppetCheckRunner(config).check(paths)
    except CheckerToolError as e:
        _exit_error(str(e), EXIT_TOOL_ERROR)
    except PuppetCheckError as e:
        _exit_error(str(e))

    # Headers keep their ANSI colours even when stdout is not a terminal
    typer.echo(render(store), nl=False, color=True)
    raise typer.Exit(code=EXIT_CONTENT_ERRORS if store.has_errors else EXIT_SUCCESS)


if __name__ == "__main__":
    app()
