#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/utils/decorators.py
"""Dependency gating and DEBUG timing for the decoders and the PDF renderer.

PyMuPDF, python-docx and ReportLab are imported inside the methods that
use them. ``requires_dependencies`` runs first and reports every missing
or out-of-range package in one ``DependencyError`` with an install hint.
"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Iterator, Sequence

from docreflow.exceptions import DependencyError
from docreflow.utils.packages import check_version_requirement

# (install name, import name, version specifier)
PackageRequirement = tuple[str, str, str]


def find_unmet_requirements(
    packages: Sequence[PackageRequirement],
) -> tuple[list[tuple[str, str]], list[tuple[str, str, str]], ImportError | None]:
    """Return missing packages, version mismatches and the first import error."""
    missing: list[tuple[str, str]] = []
    mismatched: list[tuple[str, str, str]] = []
    first_error: ImportError | None = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue

        if not version_spec:
            continue
        satisfied, installed = check_version_requirement(install_name, version_spec)
        if not satisfied:
            mismatched.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatched, first_error


def requires_dependencies(converter_name: str, packages: Sequence[PackageRequirement]) -> Callable:
    """Refuse to call the wrapped function until ``packages`` are usable.

    Parameters
    ----------
    converter_name : str
        Component named in the error ("pdf", "docx", "pdf_render")
    packages : sequence of (install_name, import_name, version_spec)
        Requirements checked on every call

    Raises
    ------
    DependencyError
        From the wrapped callable, when a package is missing or its
        version does not satisfy the specifier

    Examples
    --------
        >>> @requires_dependencies("pdf", [("pymupdf", "fitz", ">=1.26.4")])
        ... def open(self, source):
        ...     import fitz

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatched, first_error = find_unmet_requirements(packages)
            if missing or mismatched:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=mismatched,
                    original_import_error=first_error,
                ) from first_error
            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log ``"<operation> completed in N.NNs"`` when ``logger`` is at DEBUG."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    yield
    logger.debug(f"{operation} completed in {time.perf_counter() - started:.2f}s")
