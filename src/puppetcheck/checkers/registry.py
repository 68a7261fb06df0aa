"""Checker registry mapping file buckets to checkers.

The registry is the seam for swapping or adding checkers: the dispatcher
only ever asks it for the checker of a bucket.
"""

from __future__ import annotations

from puppetcheck.checkers.base import BaseChecker
from puppetcheck.classifier import FileBucket


class CheckerRegistry:
    """Registry that maps each FileBucket to the checker responsible for it.

    Example:
        >>> registry = CheckerRegistry()
        >>> registry.register(JsonChecker())
        >>> registry.get_checker(FileBucket.DATA_JSON).check(files, store)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._checkers: dict[FileBucket, BaseChecker] = {}

    def register(self, checker: BaseChecker, *, replace: bool = False) -> None:
        """Register a checker for its bucket.

        Args:
            checker: Checker instance with ``bucket`` set.
            replace: Allow replacing a checker already registered for the bucket.

        Raises:
            ValueError: If the checker has no bucket, targets the ignored
                bucket, or its bucket is taken and ``replace`` is False.
        """
        bucket = checker.bucket
        if bucket is None:
            raise ValueError(f"Checker class {type(checker).__name__} has no bucket defined")
        if bucket is FileBucket.IGNORED:
            raise ValueError("Ignored files cannot have a checker")
        if bucket in self._checkers and not replace:
            raise ValueError(
                f"Checker for bucket '{bucket.value}' already registered: "
                f"{type(self._checkers[bucket]).__name__}"
            )
        self._checkers[bucket] = checker

    def get_checker(self, bucket: FileBucket) -> BaseChecker | None:
        """Get the checker registered for a bucket, or None."""
        return self._checkers.get(bucket)

    def has_checker(self, bucket: FileBucket) -> bool:
        return bucket in self._checkers

    def list_buckets(self) -> list[FileBucket]:
        """List registered buckets in dispatch order."""
        return [bucket for bucket in FileBucket if bucket in self._checkers]


def create_default_registry() -> CheckerRegistry:
    """Create a registry populated with the built-in checkers."""
    # Import here to avoid circular imports
    from puppetcheck.checkers.data import JsonChecker, YamlChecker
    from puppetcheck.checkers.puppet import ManifestChecker, TemplateChecker
    from puppetcheck.checkers.ruby import LibrarianChecker, RubyChecker, RubyTemplateChecker

    registry = CheckerRegistry()
    registry.register(ManifestChecker())
    registry.register(TemplateChecker())
    registry.register(RubyChecker())
    registry.register(RubyTemplateChecker())
    registry.register(YamlChecker())
    registry.register(JsonChecker())
    registry.register(LibrarianChecker())
    return registry
