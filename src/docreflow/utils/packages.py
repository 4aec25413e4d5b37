#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/utils/packages.py
"""Look up installed distribution versions for the dependency checks."""

from __future__ import annotations

from importlib import metadata

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version


def get_package_version(package_name: str) -> str | None:
    """Installed version of a distribution (``pymupdf``, not ``fitz``), or None."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> tuple[bool, str | None]:
    """Return ``(satisfied, installed_version)`` for ``package_name``.

    A package that is not installed is never satisfied. An unparseable
    specifier or version is not held against the package.
    """
    installed = get_package_version(package_name)
    if installed is None:
        return False, None

    try:
        return Version(installed) in SpecifierSet(version_spec), installed
    except (InvalidSpecifier, InvalidVersion):
        return True, installed
