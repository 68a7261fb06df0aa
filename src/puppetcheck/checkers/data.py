"""Checkers for YAML and JSON data files.

Both formats are parsed in-process. Parsed mappings get the hieradata
checks; Puppet module metadata.json files get the metadata checks instead.
"""

from __future__ import annotations

import json
import os
from collections import Counter
from typing import TYPE_CHECKING, Any

import yaml

from puppetcheck.checkers.base import BaseChecker
from puppetcheck.classifier import FileBucket
from puppetcheck.logging import get_logger

if TYPE_CHECKING:
    from puppetcheck.store import DiagnosticStore

logger = get_logger("checkers.data")

METADATA_FILENAME = "metadata.json"
METADATA_REQUIRED_KEYS = ("name", "version", "author", "license", "summary", "source", "dependencies")
METADATA_DEPRECATED_KEYS = ("types", "checksum")
SUMMARY_MAX_LENGTH = 144


def hiera_warnings(data: Any) -> list[str]:
    """Check parsed hieradata for keys with missing values.

    A key is flagged when its value is null, or when its value is a mapping
    containing null values. Null keys are fine. Non-mapping documents are
    not hieradata and produce no warnings.

    Args:
        data: Parsed YAML or JSON document.

    Returns:
        Warning messages, in key order.
    """
    if not isinstance(data, dict):
        return []

    warnings: list[str] = []
    for key, value in data.items():
        if value is None or (isinstance(value, dict) and any(v is None for v in value.values())):
            warnings.append(f"Value(s) missing in key '{key}'.")
    return warnings


def metadata_problems(data: Any) -> tuple[list[str], list[str]]:
    """Check a parsed metadata.json document.

    Args:
        data: Parsed JSON document.

    Returns:
        Tuple of (errors, warnings).
    """
    if not isinstance(data, dict):
        return ["metadata.json must contain a JSON object."], []

    errors: list[str] = []
    warnings: list[str] = []

    for key in METADATA_REQUIRED_KEYS:
        if key not in data:
            errors.append(f"Required field '{key}' not found.")

    dependencies = data.get("dependencies")
    if isinstance(dependencies, list):
        named = [d for d in dependencies if isinstance(d, dict) and isinstance(d.get("name"), str)]
        if any(not isinstance(d, dict) or not isinstance(d.get("name"), str) for d in dependencies):
            errors.append("Dependency name must be a string.")
        counts = Counter(d["name"] for d in named)
        for name, count in counts.items():
            if count > 1:
                errors.append(f"Duplicate dependencies on {name}.")
        for dependency in named:
            if "version_requirement" not in dependency:
                warnings.append(f"'{dependency['name']}' is missing a version_requirement.")
    elif dependencies is not None:
        errors.append("Field 'dependencies' must be an array.")

    for key in METADATA_DEPRECATED_KEYS:
        if key in data:
            errors.append(f"Deprecated field '{key}' found.")

    summary = data.get("summary")
    if isinstance(summary, str) and len(summary) > SUMMARY_MAX_LENGTH:
        errors.append(f"Summary exceeds {SUMMARY_MAX_LENGTH} characters.")

    if "operatingsystem_support" in data and not isinstance(data["operatingsystem_support"], list):
        warnings.append("Field 'operatingsystem_support' should be an array of objects.")

    return errors, warnings


class YamlChecker(BaseChecker):
    """Parses YAML files and runs the hieradata checks on them."""

    bucket = FileBucket.DATA_YAML

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        try:
            with open(path, encoding="utf-8") as f:
                parsed = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            logger.debug("YAML parse failure in %s", path)
            store.error(path, str(e))
            return

        warnings = hiera_warnings(parsed)
        if warnings:
            store.warning(path, "\n".join(warnings))
        else:
            store.clean_file(path)


class JsonChecker(BaseChecker):
    """Parses JSON files; metadata.json gets module metadata checks."""

    bucket = FileBucket.DATA_JSON

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        try:
            with open(path, encoding="utf-8") as f:
                parsed = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.debug("JSON parse failure in %s", path)
            store.error(path, str(e))
            return

        if os.path.basename(path) == METADATA_FILENAME:
            errors, warnings = metadata_problems(parsed)
            if errors:
                store.error(path, "\n".join(errors))
                return
        else:
            warnings = hiera_warnings(parsed)

        if warnings:
            store.warning(path, "\n".join(warnings))
        else:
            store.clean_file(path)
