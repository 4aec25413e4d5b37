#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/options/extraction.py
"""Options for decoding source documents and reconstructing their text."""

from __future__ import annotations

from dataclasses import dataclass, field

from docreflow.constants import DEFAULT_GAP_THRESHOLD
from docreflow.options.base import BaseOptions


@dataclass(frozen=True)
class ExtractionOptions(BaseOptions):
    """Configuration for turning a source document into plain text.

    Parameters
    ----------
    gap_threshold : float, default 6.0
        Vertical distance, in source units, above which two consecutive
        fragments are placed on separate lines. Raise it for loosely
        spaced documents that split lines too eagerly.
    pages : list[int], str, or None, default None
        1-based pages to decode, either ``[1, 3]`` or ``"1-3,5"``.
        None decodes every page.
    password : str or None, default None
        Password for encrypted PDF files.
    use_chardet : bool, default True
        Detect the encoding of plain-text sources with chardet.

    """

    gap_threshold: float = field(
        default=DEFAULT_GAP_THRESHOLD,
        metadata={"help": "Vertical gap (source units) that starts a new line", "type": float},
    )
    pages: list[int] | str | None = field(
        default=None,
        metadata={"help": "Pages to extract, 1-based (e.g. '1-3,5')"},
    )
    password: str | None = field(
        default=None,
        metadata={"help": "Password for encrypted PDF files"},
    )
    use_chardet: bool = field(
        default=True,
        metadata={"help": "Detect plain-text encodings with chardet"},
    )

    def __post_init__(self) -> None:
        """Validate the gap threshold.

        Raises
        ------
        ValueError
            If gap_threshold is negative.

        """
        super().__post_init__()
        if self.gap_threshold < 0:
            raise ValueError(f"gap_threshold must be non-negative, got {self.gap_threshold}")
