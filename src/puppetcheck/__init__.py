"""puppet-check - batch validation for Puppet modules and control repos.

Discovers files under the supplied paths, sorts them by type, hands each
group to the checker responsible for it and reports the collected results.
"""

from __future__ import annotations

__version__ = "0.1.0"

from puppetcheck.errors import PuppetCheckError
from puppetcheck.resolver import NoFilesFoundError
from puppetcheck.runner import PuppetCheckRunner, run

__all__ = [
    "NoFilesFoundError",
    "PuppetCheckError",
    "PuppetCheckRunner",
    "__version__",
    "run",
]
