"""Base checker class and helpers for running external tools.

A checker receives the files of one bucket and records one diagnostic per
file in the run's DiagnosticStore. Content problems are diagnostics; only
a checker that cannot do its job at all raises.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from puppetcheck.errors import PuppetCheckError

if TYPE_CHECKING:
    from puppetcheck.classifier import FileBucket
    from puppetcheck.store import DiagnosticStore


class CheckerToolError(PuppetCheckError):
    """Raised when a checker's external tool cannot be executed."""

    def __init__(self, tool: str, reason: str) -> None:
        self.tool = tool
        self.reason = reason
        super().__init__(f"Unable to run '{tool}': {reason}")


@dataclass
class ToolResult:
    """Outcome of an external tool invocation.

    Attributes:
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stripped output, stderr first."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


def run_tool(args: list[str], input_text: str | None = None) -> ToolResult:
    """Run an external tool and capture its output.

    Args:
        args: Command line, executable first.
        input_text: Optional text fed to the tool's stdin.

    Returns:
        ToolResult with the exit status and captured output.

    Raises:
        CheckerToolError: If the executable is missing or cannot be started.
    """
    try:
        result = subprocess.run(
            args,
            input=input_text,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise CheckerToolError(args[0], "executable not found") from e
    except OSError as e:
        raise CheckerToolError(args[0], str(e)) from e

    return ToolResult(returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)


class BaseChecker(ABC):
    """Abstract base class for all checkers.

    Subclasses set ``bucket`` to the FileBucket they handle and implement
    ``check_file``; ``check`` drives it over the bucket's files in order.
    """

    bucket: ClassVar[FileBucket | None] = None

    def check(self, files: list[str], store: DiagnosticStore) -> None:
        """Check every file and record the results in the store.

        Args:
            files: Files of this checker's bucket, in discovery order.
            store: Store of the current run; also the source of options.
        """
        for path in files:
            self.check_file(path, store)

    @abstractmethod
    def check_file(self, path: str, store: DiagnosticStore) -> None:
        """Check one file and record exactly one diagnostic for it."""
