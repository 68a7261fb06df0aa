"""Checkers for the file types puppet-check recognises.

Each checker handles one FileBucket and records one diagnostic per file.
"""

from __future__ import annotations

from puppetcheck.checkers.base import BaseChecker, CheckerToolError, ToolResult, run_tool
from puppetcheck.checkers.data import JsonChecker, YamlChecker
from puppetcheck.checkers.puppet import ManifestChecker, TemplateChecker
from puppetcheck.checkers.registry import CheckerRegistry, create_default_registry
from puppetcheck.checkers.ruby import LibrarianChecker, RubyChecker, RubyTemplateChecker

__all__ = [
    # Base types
    "BaseChecker",
    "CheckerToolError",
    "ToolResult",
    "run_tool",
    # Checkers
    "JsonChecker",
    "LibrarianChecker",
    "ManifestChecker",
    "RubyChecker",
    "RubyTemplateChecker",
    "TemplateChecker",
    "YamlChecker",
    # Registry
    "CheckerRegistry",
    "create_default_registry",
]
