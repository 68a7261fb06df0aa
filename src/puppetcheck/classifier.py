"""File classification for puppet-check.

Sorts resolved files into buckets by filename. Rules are evaluated in
order and the first match wins; matching is case-sensitive.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from enum import Enum

from puppetcheck.logging import get_logger

logger = get_logger("classifier")


class FileBucket(str, Enum):
    """Classification group of a file. Members are listed in dispatch order."""

    MANIFEST = "manifest"
    TEMPLATE = "template"
    SCRIPT = "script"
    SCRIPT_TEMPLATE = "script-template"
    DATA_YAML = "data-yaml"
    DATA_JSON = "data-json"
    DEPENDENCY_DESCRIPTOR = "dependency-descriptor"
    IGNORED = "ignored"


# Buckets handed to checkers, in the order their diagnostics are recorded
DISPATCH_ORDER: tuple[FileBucket, ...] = tuple(b for b in FileBucket if b is not FileBucket.IGNORED)

Rule = tuple[Callable[[str], bool], FileBucket]


def _suffix(*suffixes: str) -> Callable[[str], bool]:
    return lambda path: path.endswith(suffixes)


def _basename(*names: str) -> Callable[[str], bool]:
    return lambda path: os.path.basename(path) in names


CLASSIFICATION_RULES: tuple[Rule, ...] = (
    (_suffix(".pp"), FileBucket.MANIFEST),
    (_suffix(".epp"), FileBucket.TEMPLATE),
    (_suffix(".rb"), FileBucket.SCRIPT),
    (_suffix(".erb"), FileBucket.SCRIPT_TEMPLATE),
    (_suffix(".yaml", ".yml"), FileBucket.DATA_YAML),
    (_suffix(".json"), FileBucket.DATA_JSON),
    (_basename("Puppetfile", "Modulefile"), FileBucket.DEPENDENCY_DESCRIPTOR),
)


def classify_file(path: str, rules: Iterable[Rule] = CLASSIFICATION_RULES) -> FileBucket:
    """Return the bucket of the first rule matching the path, else IGNORED."""
    for predicate, bucket in rules:
        if predicate(path):
            return bucket
    return FileBucket.IGNORED


def classify(
    files: Iterable[str],
    rules: Iterable[Rule] = CLASSIFICATION_RULES,
) -> dict[FileBucket, list[str]]:
    """Partition files into buckets.

    Args:
        files: Resolved file paths.
        rules: Ordered (predicate, bucket) pairs.

    Returns:
        Mapping holding every bucket, empty ones included. Each list keeps
        the order in which its files appeared in the input.
    """
    rules = tuple(rules)
    buckets: dict[FileBucket, list[str]] = {bucket: [] for bucket in FileBucket}

    for path in files:
        buckets[classify_file(path, rules)].append(path)

    logger.debug(
        "Classified files: %s",
        ", ".join(f"{b.value}={len(f)}" for b, f in buckets.items() if f),
    )
    return buckets
