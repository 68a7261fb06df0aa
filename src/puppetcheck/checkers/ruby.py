"""Checkers for Ruby sources, ERB templates and Puppetfile/Modulefile.

Syntax is checked with ``ruby -c``; style with ``rubocop``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, ClassVar

from puppetcheck.checkers.base import BaseChecker, run_tool
from puppetcheck.classifier import FileBucket
from puppetcheck.logging import get_logger

if TYPE_CHECKING:
    from puppetcheck.store import DiagnosticStore

logger = get_logger("checkers.ruby")


def strip_path_prefix(output: str, path: str) -> str:
    """Drop the "<absolute path>:" prefix rubocop puts on every offense."""
    return output.replace(f"{os.path.abspath(path)}:", "")


class RubyChecker(BaseChecker):
    """Checks Ruby syntax and, optionally, style."""

    bucket = FileBucket.SCRIPT
    extra_rubocop_args: ClassVar[tuple[str, ...]] = ()

    def rubocop_command(self, path: str, store: DiagnosticStore) -> list[str]:
        return [
            "rubocop",
            *store.config.rubocop_args,
            *self.extra_rubocop_args,
            "--format",
            "emacs",
            path,
        ]

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        result = run_tool(["ruby", "-c", path])
        if not result.ok:
            store.error(path, result.stderr.strip() or result.output)
            return

        if store.config.style_check:
            style = run_tool(self.rubocop_command(path, store))
            warnings = strip_path_prefix(style.stdout.strip(), path)
            if warnings:
                store.warning(path, warnings)
                return

        store.clean_file(path)


class RubyTemplateChecker(BaseChecker):
    """Checks the Ruby embedded in ERB templates."""

    bucket = FileBucket.SCRIPT_TEMPLATE

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        compiled = run_tool(["erb", "-P", "-x", "-T", "-", path])
        if not compiled.ok:
            store.error(path, compiled.output)
            return

        result = run_tool(["ruby", "-c", "-"], input_text=compiled.stdout)
        if not result.ok:
            logger.debug("Embedded Ruby in %s failed to compile", path)
            store.error(path, result.stderr.strip() or result.output)
        elif result.stderr.strip():
            store.warning(path, result.stderr.strip())
        else:
            store.clean_file(path)


class LibrarianChecker(RubyChecker):
    """Checks Puppetfile and Modulefile dependency descriptors."""

    bucket = FileBucket.DEPENDENCY_DESCRIPTOR
    # These files are not named like Ruby sources
    extra_rubocop_args = ("--except", "Naming/FileName")
