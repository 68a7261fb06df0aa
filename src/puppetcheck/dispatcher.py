"""Dispatch of classified files to their checkers.

Buckets are processed in DISPATCH_ORDER so that the diagnostics of one
bucket are always recorded before those of the next. Checker failures are
not caught here: a crashing checker aborts the run.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Mapping, Sequence

from puppetcheck.checkers.base import BaseChecker
from puppetcheck.checkers.registry import CheckerRegistry
from puppetcheck.classifier import DISPATCH_ORDER, FileBucket
from puppetcheck.errors import PuppetCheckError
from puppetcheck.logging import get_logger
from puppetcheck.store import DiagnosticStore

logger = get_logger("dispatcher")


class CheckerNotRegisteredError(PuppetCheckError):
    """Raised when files were classified into a bucket that has no checker."""

    def __init__(self, bucket: FileBucket) -> None:
        self.bucket = bucket
        super().__init__(f"No checker registered for '{bucket.value}' files")


def _planned_checks(
    buckets: Mapping[FileBucket, Sequence[str]],
    registry: CheckerRegistry,
) -> list[tuple[FileBucket, BaseChecker, list[str]]]:
    """Pair every non-empty bucket with its checker, in dispatch order."""
    planned: list[tuple[FileBucket, BaseChecker, list[str]]] = []
    for bucket in DISPATCH_ORDER:
        files = list(buckets.get(bucket, ()))
        if not files:
            continue
        checker = registry.get_checker(bucket)
        if checker is None:
            raise CheckerNotRegisteredError(bucket)
        planned.append((bucket, checker, files))
    return planned


def _dispatch_sequential(
    planned: list[tuple[FileBucket, BaseChecker, list[str]]],
    store: DiagnosticStore,
) -> None:
    for bucket, checker, files in planned:
        logger.debug("Checking %d %s file(s) with %s", len(files), bucket.value, type(checker).__name__)
        checker.check(files, store)


def _dispatch_parallel(
    planned: list[tuple[FileBucket, BaseChecker, list[str]]],
    store: DiagnosticStore,
) -> None:
    """Run each bucket's checker on its own worker.

    Every worker writes to a private child store. Children are merged into
    the parent in dispatch order once all workers have finished, so the
    result matches the sequential order.
    """
    children = [store.spawn() for _ in planned]

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(planned)) as executor:
        futures = [
            executor.submit(checker.check, files, child)
            for (_, checker, files), child in zip(planned, children)
        ]
        concurrent.futures.wait(futures)

    # Re-raise the first failure in dispatch order; nothing is merged on abort
    for future in futures:
        future.result()

    for child in children:
        store.merge(child)


def dispatch(
    buckets: Mapping[FileBucket, Sequence[str]],
    registry: CheckerRegistry,
    store: DiagnosticStore,
    *,
    parallel: bool = False,
) -> DiagnosticStore:
    """Hand every non-empty bucket to its checker.

    Ignored files are recorded directly in the store without invoking any
    checker. Empty buckets are skipped.

    Args:
        buckets: Classified files.
        registry: Checker lookup.
        store: Store receiving the diagnostics.
        parallel: Run the bucket checkers concurrently.

    Returns:
        The populated store.

    Raises:
        CheckerNotRegisteredError: If a non-empty bucket has no checker.
    """
    planned = _planned_checks(buckets, registry)

    if parallel and len(planned) > 1:
        _dispatch_parallel(planned, store)
    else:
        _dispatch_sequential(planned, store)

    for path in buckets.get(FileBucket.IGNORED, ()):
        store.ignore(path)

    return store
