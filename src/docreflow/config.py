#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/config.py
"""Configuration files for the docreflow command line.

A configuration file holds up to two tables, ``extract`` and ``render``,
keyed by ``ExtractionOptions`` and ``LayoutOptions`` field names::

    # .docreflow.toml
    [extract]
    gap_threshold = 8

    [render]
    page_size = "letter"
    margin = 25

The same tables can live under ``[tool.docreflow]`` in pyproject.toml.
Every problem is reported as ``argparse.ArgumentTypeError`` so the CLI
can treat it like a bad flag.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAMES = (".docreflow.toml", ".docreflow.yaml", ".docreflow.yml", ".docreflow.json")
CONFIG_ENV_VAR = "DOCREFLOW_CONFIG"


def _read_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


_READERS: dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def _pyproject_table(path: Path) -> dict[str, Any]:
    """The ``[tool.docreflow]`` table of a pyproject.toml, or {}."""
    try:
        table = _read_toml(path).get("tool", {}).get("docreflow", {})
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"{path} is not valid TOML: {e}") from e
    if not isinstance(table, dict):
        raise argparse.ArgumentTypeError(f"[tool.docreflow] in {path} must be a table")
    return table


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from ``start_dir`` (default: cwd) to the nearest config file.

    Within one directory the ``CONFIG_FILENAMES`` win over a pyproject.toml,
    which only counts when it has a ``[tool.docreflow]`` table.
    """
    directory = (start_dir or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILENAMES:
            if (candidate_dir / name).is_file():
                return candidate_dir / name

        pyproject = candidate_dir / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _pyproject_table(pyproject):
                    return pyproject
            except argparse.ArgumentTypeError:
                # A broken pyproject.toml of some other project is not ours to report
                continue
    return None


def discover_config_file() -> Optional[Path]:
    """Nearest config file above the cwd, else one in the home directory."""
    found = find_config_in_parents()
    if found is not None:
        return found
    home = Path.home()
    return next((home / name for name in CONFIG_FILENAMES if (home / name).is_file()), None)


def load_config_file(config_path: Path | str) -> dict[str, Any]:
    """Read a TOML, YAML, JSON or pyproject.toml configuration file.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, of an unknown type, or does
        not hold a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")

    if path.name.lower() == "pyproject.toml":
        return _pyproject_table(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file type {path.suffix!r}; use one of {', '.join(sorted(_READERS))}"
        )

    try:
        config = reader(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"{path} must hold a mapping at the top level, not {type(config).__name__}")
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> dict[str, Any]:
    """Load ``--config``, else ``$DOCREFLOW_CONFIG``, else a discovered file.

    Returns {} when there is nothing to load.
    """
    chosen = explicit_path or env_var_path or discover_config_file()
    return load_config_file(chosen) if chosen else {}


def get_section(config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return table ``name`` of a loaded config, {} when absent."""
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(f"Config section '{name}' must be a table, got {type(section).__name__}")
    return section
