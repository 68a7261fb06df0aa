"""Configuration management for puppet-check.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .puppetcheckrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

RC_FILENAME = ".puppetcheckrc"
PYPROJECT_SECTION = "puppet-check"
ENV_PREFIX = "PUPPETCHECK_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass
class PuppetCheckConfig:
    """Configuration for a puppet-check run.

    Attributes:
        future_parser: Validate manifests with the future parser.
        style_check: Run style tools (puppet-lint, rubocop) on files that parse.
        puppetlint_args: Extra arguments passed through to puppet-lint.
        rubocop_args: Extra arguments passed through to rubocop.
        follow_symlinks: Descend into symlinked directories during traversal.
        include_hidden: Include dot-files and dot-directories during traversal.
        parallel: Run each bucket's checker on its own worker thread.
    """

    future_parser: bool = False
    style_check: bool = False
    puppetlint_args: list[str] = field(default_factory=list)
    rubocop_args: list[str] = field(default_factory=list)
    follow_symlinks: bool = False
    include_hidden: bool = False
    parallel: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_args"):
                if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
                    raise ValueError(f"{f.name} must be a list of strings")
            elif not isinstance(value, bool):
                raise ValueError(f"{f.name} must be a boolean")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(PuppetCheckConfig)}


def _is_list_field(name: str) -> bool:
    return name.endswith("_args")


def parse_bool(value: str) -> bool:
    """Parse a boolean from its textual form.

    Args:
        value: Text such as "1", "true", "no" or "off" (case-insensitive).

    Returns:
        The parsed boolean.

    Raises:
        ValueError: If the text is not a recognised boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def split_args(value: str | list[str]) -> list[str]:
    """Split a shell-style argument string; lists are returned unchanged."""
    if isinstance(value, list):
        return value
    return shlex.split(value)


def find_config_file(filename: str = RC_FILENAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _coerce(data: dict[str, Any]) -> dict[str, Any]:
    """Filter to known fields and normalise argument strings to lists."""
    valid_fields = _get_config_field_names()
    result: dict[str, Any] = {}
    for key, value in data.items():
        key = key.replace("-", "_")
        if key not in valid_fields:
            continue
        if _is_list_field(key) and isinstance(value, str):
            value = split_args(value)
        result[key] = value
    return result


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from a .puppetcheckrc TOML file.

    Returns:
        Configuration from the rc file, or empty dict if absent or malformed.
    """
    config_path = find_config_file(RC_FILENAME, start_dir)
    if config_path is None:
        return {}

    try:
        return _coerce(_load_toml_file(config_path))
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.puppet-check] section."""
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        section = data.get("tool", {}).get(PYPROJECT_SECTION, {})
        return _coerce(section)
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Variables are the upper-cased field names prefixed with PUPPETCHECK_,
    e.g. PUPPETCHECK_STYLE_CHECK=1 or PUPPETCHECK_RUBOCOP_ARGS="--lint".

    Raises:
        ValueError: If a boolean variable holds an unrecognised value.
    """
    result: dict[str, Any] = {}
    for name in sorted(_get_config_field_names()):
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is None:
            continue
        result[name] = split_args(value) if _is_list_field(name) else parse_bool(value)
    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries, later ones taking precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> PuppetCheckConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (PUPPETCHECK_*)
    3. .puppetcheckrc file
    4. pyproject.toml [tool.puppet-check] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments. None values
            are treated as "not given".
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved PuppetCheckConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    cli_config = _coerce({k: v for k, v in (cli_overrides or {}).items() if v is not None})

    merged = _merge_configs(
        _load_from_pyproject(start_dir),
        _load_from_rc(start_dir),
        _load_from_env(),
        cli_config,
    )

    return PuppetCheckConfig(**merged)
