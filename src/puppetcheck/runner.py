"""Top-level run orchestration.

Wires path resolution, classification, dispatch and reporting into a
single synchronous pipeline. Each run owns a fresh DiagnosticStore.
"""

from __future__ import annotations

from collections.abc import Iterable

from puppetcheck.checkers.registry import CheckerRegistry, create_default_registry
from puppetcheck.classifier import classify
from puppetcheck.config import PuppetCheckConfig
from puppetcheck.dispatcher import dispatch
from puppetcheck.logging import get_logger
from puppetcheck.reporter import render
from puppetcheck.resolver import resolve_paths
from puppetcheck.store import DiagnosticStore

logger = get_logger("runner")


class PuppetCheckRunner:
    """Runs the check pipeline over a set of paths.

    Attributes:
        config: Options for traversal, dispatch and the checkers.
        registry: Checker lookup used for dispatch.
    """

    def __init__(
        self,
        config: PuppetCheckConfig | None = None,
        registry: CheckerRegistry | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration. Defaults to PuppetCheckConfig().
            registry: Checker registry. Defaults to the built-in checkers.
        """
        self.config = config or PuppetCheckConfig()
        self.registry = registry or create_default_registry()

    def check(self, paths: Iterable[str]) -> DiagnosticStore:
        """Resolve, classify and check the files under the given paths.

        Args:
            paths: Files and/or directories.

        Returns:
            The store holding every diagnostic of this run.

        Raises:
            NoFilesFoundError: If the paths contain no files.
        """
        files = resolve_paths(
            paths,
            follow_symlinks=self.config.follow_symlinks,
            include_hidden=self.config.include_hidden,
        )
        logger.debug("Resolved %d file(s)", len(files))

        store = DiagnosticStore(config=self.config)
        return dispatch(classify(files), self.registry, store, parallel=self.config.parallel)

    def run(self, paths: Iterable[str]) -> str:
        """Check the given paths and return the rendered report."""
        return render(self.check(paths))


def run(
    paths: Iterable[str],
    config: PuppetCheckConfig | None = None,
    registry: CheckerRegistry | None = None,
) -> str:
    """Check the given paths and return the rendered report."""
    return PuppetCheckRunner(config, registry).run(paths)
