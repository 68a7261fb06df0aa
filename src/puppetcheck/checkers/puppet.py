"""Checkers for Puppet manifests and EPP templates.

Syntax is validated with the ``puppet`` command; style with ``puppet-lint``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from puppetcheck.checkers.base import BaseChecker, run_tool
from puppetcheck.classifier import FileBucket
from puppetcheck.logging import get_logger

if TYPE_CHECKING:
    from puppetcheck.store import DiagnosticStore

logger = get_logger("checkers.puppet")


class ManifestChecker(BaseChecker):
    """Validates manifest syntax and, optionally, style.

    Parser warnings emitted for a manifest that otherwise validates are
    reported as warnings, together with any puppet-lint output.
    """

    bucket = FileBucket.MANIFEST

    def validate_command(self, path: str, store: DiagnosticStore) -> list[str]:
        args = ["puppet", "parser", "validate", "--color=false"]
        if store.config.future_parser:
            args.extend(["--parser", "future"])
        args.append(path)
        return args

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        result = run_tool(self.validate_command(path, store))
        if not result.ok:
            store.error(path, result.output)
            return

        warnings: list[str] = []
        if result.output:
            warnings.append(result.output)

        if store.config.style_check:
            lint = run_tool(["puppet-lint", *store.config.puppetlint_args, path])
            if lint.output:
                warnings.append(lint.output)

        if warnings:
            store.warning(path, "\n".join(warnings))
        else:
            store.clean_file(path)


class TemplateChecker(BaseChecker):
    """Validates EPP template syntax."""

    bucket = FileBucket.TEMPLATE

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        result = run_tool(["puppet", "epp", "validate", "--color=false", path])
        if not result.ok:
            logger.debug("EPP validation failed for %s", path)
            store.error(path, result.output)
        elif result.output:
            store.warning(path, result.output)
        else:
            store.clean_file(path)
