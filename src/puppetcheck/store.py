"""Diagnostic models and the per-run diagnostic store.

Checkers append their findings to a DiagnosticStore that is owned by a
single run and read once by the reporter at the end of it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Literal

from puppetcheck.config import PuppetCheckConfig

Severity = Literal["error", "warning", "clean"]


@dataclass
class Diagnostic:
    """The outcome of checking a single file.

    Attributes:
        file: Path of the checked file, as resolved.
        severity: "error", "warning" or "clean".
        message: Checker output explaining the outcome. Usually empty for clean files.
    """

    file: str
    severity: Severity
    message: str = ""

    def render(self) -> str:
        """Format the diagnostic as a report entry.

        A one-line message follows the path on the same line; a multi-line
        message starts on the line below it.
        """
        if not self.message:
            return f"-- {self.file}"
        if "\n" not in self.message:
            return f"-- {self.file}: {self.message}"
        return f"-- {self.file}:\n{self.message}"


@dataclass
class DiagnosticStore:
    """Accumulates diagnostics for one run, partitioned by severity.

    Also carries the run configuration so checkers can read their options
    (future parser, style checks, style tool arguments) from the same object
    they write to.

    Attributes:
        config: Options consumed by checkers.
        errors: Diagnostics with severity "error", in append order.
        warnings: Diagnostics with severity "warning", in append order.
        clean: Diagnostics with severity "clean", in append order.
        ignored: Report entries for files no checker handles.
    """

    config: PuppetCheckConfig = field(default_factory=PuppetCheckConfig)
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)
    clean: list[Diagnostic] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def _bucket_for(self, severity: Severity) -> list[Diagnostic]:
        if severity == "error":
            return self.errors
        if severity == "warning":
            return self.warnings
        if severity == "clean":
            return self.clean
        raise ValueError(f"Unknown severity: {severity!r}")

    def add(self, diagnostic: Diagnostic) -> None:
        """Append a diagnostic to the list matching its severity."""
        target = self._bucket_for(diagnostic.severity)
        with self._lock:
            target.append(diagnostic)

    def error(self, file: str, message: str) -> None:
        self.add(Diagnostic(file=file, severity="error", message=message))

    def warning(self, file: str, message: str) -> None:
        self.add(Diagnostic(file=file, severity="warning", message=message))

    def clean_file(self, file: str, message: str = "") -> None:
        self.add(Diagnostic(file=file, severity="clean", message=message))

    def ignore(self, file: str) -> None:
        """Record a file that no checker handles."""
        with self._lock:
            self.ignored.append(f"-- {file}")

    def reset(self) -> None:
        """Empty every list so the store can serve a new batch."""
        with self._lock:
            self.errors.clear()
            self.warnings.clear()
            self.clean.clear()
            self.ignored.clear()

    def spawn(self) -> DiagnosticStore:
        """Create an empty store sharing this store's configuration."""
        return DiagnosticStore(config=self.config)

    def merge(self, other: DiagnosticStore) -> None:
        """Append everything recorded in another store, preserving its order."""
        with self._lock:
            self.errors.extend(other.errors)
            self.warnings.extend(other.warnings)
            self.clean.extend(other.clean)
            self.ignored.extend(other.ignored)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def counts(self) -> dict[str, int]:
        """Number of entries per report section."""
        return {
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "clean": len(self.clean),
            "ignored": len(self.ignored),
        }
