"""Report rendering for puppet-check."""

from __future__ import annotations

import typer

from puppetcheck.store import DiagnosticStore

ERRORS_HEADER = "The following files have errors:"
WARNINGS_HEADER = "The following files have warnings:"
CLEAN_HEADER = "The following files have no errors or warnings:"
IGNORED_HEADER = "The following files have unrecognized formats and therefore were not processed:"


def _section(header: str, color: str, entries: list[str], separator: str, *, leading: bool) -> str:
    prefix = "\n" if leading else ""
    return f"{prefix}{typer.style(header, fg=color)}\n{separator.join(entries)}\n"


def render(store: DiagnosticStore) -> str:
    """Render the store as a colour-coded report.

    Sections appear in the order errors, warnings, clean, ignored and are
    left out when empty. Error and warning entries are separated by a blank
    line, clean and ignored entries by a newline. The store is not modified.

    Args:
        store: Store populated by a run.

    Returns:
        The report text; empty when the store holds nothing.
    """
    parts: list[str] = []

    if store.errors:
        parts.append(
            _section(
                ERRORS_HEADER,
                typer.colors.RED,
                [d.render() for d in store.errors],
                "\n\n",
                leading=False,
            )
        )
    if store.warnings:
        parts.append(
            _section(
                WARNINGS_HEADER,
                typer.colors.YELLOW,
                [d.render() for d in store.warnings],
                "\n\n",
                leading=True,
            )
        )
    if store.clean:
        parts.append(
            _section(CLEAN_HEADER, typer.colors.GREEN, [d.render() for d in store.clean], "\n", leading=True)
        )
    if store.ignored:
        parts.append(_section(IGNORED_HEADER, typer.colors.BLUE, list(store.ignored), "\n", leading=True))

    return "".join(parts)
