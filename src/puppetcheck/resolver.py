"""Path resolution for puppet-check.

Expands the paths supplied by the user into the flat, deduplicated list of
files that will be classified and checked.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

from puppetcheck.errors import PuppetCheckError
from puppetcheck.logging import get_logger

logger = get_logger("resolver")

_REPEATED_SEPARATORS = re.compile(r"/{2,}")


class NoFilesFoundError(PuppetCheckError):
    """Raised when none of the supplied paths contain any files."""

    def __init__(self, paths: Iterable[str]) -> None:
        self.paths = list(paths)
        super().__init__(f"No files found in supplied paths {', '.join(self.paths)}.")


def normalize_path(path: str) -> str:
    """Collapse runs of path separators into a single one."""
    return _REPEATED_SEPARATORS.sub("/", path)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def walk_files(
    directory: str,
    *,
    follow_symlinks: bool = False,
    include_hidden: bool = False,
) -> list[str]:
    """List every regular file beneath a directory.

    The walk is pre-order with entries sorted by name, so a directory's own
    files come before those of its subdirectories.

    Args:
        directory: Directory to walk, used verbatim as the path prefix.
        follow_symlinks: Descend into symlinked directories. A directory reached
            twice (a symlink cycle) is only walked the first time.
        include_hidden: Include names beginning with ".".

    Returns:
        File paths of the form "<directory>/<relative path>".
    """
    files: list[str] = []
    visited: set[tuple[int, int]] = set()

    for root, dirnames, filenames in os.walk(directory, followlinks=follow_symlinks):
        if follow_symlinks:
            # Each physical directory is walked once, which breaks symlink cycles
            st = os.stat(root)
            if (st.st_dev, st.st_ino) in visited:
                logger.debug("Skipping %s: directory already visited", root)
                dirnames[:] = []
                continue
            visited.add((st.st_dev, st.st_ino))

        if not include_hidden:
            dirnames[:] = [d for d in dirnames if not _is_hidden(d)]
            filenames = [f for f in filenames if not _is_hidden(f)]
        dirnames.sort()

        rel_root = os.path.relpath(root, directory)
        for filename in sorted(filenames):
            rel = filename if rel_root == os.curdir else f"{rel_root}/{filename}"
            candidate = f"{directory}/{rel}"
            # os.path.isfile follows symlinks, so links to regular files count
            if os.path.isfile(candidate):
                files.append(candidate)

    return files


def resolve_paths(
    paths: Iterable[str],
    *,
    follow_symlinks: bool = False,
    include_hidden: bool = False,
) -> list[str]:
    """Resolve user-supplied paths into a list of unique files.

    Directories contribute every regular file beneath them, files are taken
    as-is and anything else is dropped. Separators are normalized and
    duplicates removed, keeping the first occurrence.

    Args:
        paths: Files and/or directories to check.
        follow_symlinks: Descend into symlinked directories.
        include_hidden: Include dot-files and dot-directories found while walking.

    Returns:
        Ordered list of unique file paths.

    Raises:
        NoFilesFoundError: If no files were found.
    """
    paths = list(paths)
    files: list[str] = []

    for path in dict.fromkeys(paths):
        if os.path.isdir(path):
            found = walk_files(
                path,
                follow_symlinks=follow_symlinks,
                include_hidden=include_hidden,
            )
            logger.debug("Found %d file(s) in %s", len(found), path)
            files.extend(found)
        elif os.path.isfile(path):
            files.append(path)
        else:
            logger.debug("Skipping %s: not a file or directory", path)

    if not files:
        raise NoFilesFoundError(paths)

    return list(dict.fromkeys(normalize_path(f) for f in files))
