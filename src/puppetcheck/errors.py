"""Exception base for puppet-check."""

from __future__ import annotations


class PuppetCheckError(Exception):
    """Base class for operational failures that abort a run."""
