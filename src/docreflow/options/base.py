#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/options/base.py
"""Shared behavior of the docreflow option dataclasses.

Options are frozen. Changing one means building a new instance with
``create_updated``, which re-runs ``__post_init__`` validation. Every
field documents itself in ``metadata["help"]``; the CLI turns those into
flags, reading ``metadata["type"]`` and ``metadata["choices"]`` when set.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes for frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        Raises
        ------
        ValueError
            If the new values fail validation

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build options from a config-file table.

        Keys may be spelled ``gap-threshold`` or ``gap_threshold``; keys
        that are not fields are dropped.
        """
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs = {key.replace("-", "_"): value for key, value in values.items()}
        return cls(**{name: value for name, value in kwargs.items() if name in names})


@dataclass(frozen=True)
class BaseOptions(CloneFrozenMixin):
    """Base class for ``ExtractionOptions`` and ``LayoutOptions``."""

    def __post_init__(self) -> None:
        """Subclasses validate their fields here and raise ValueError."""
