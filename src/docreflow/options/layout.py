#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/options/layout.py
"""Options for paginating text and drawing it with ReportLab.

All distances are layout units (millimetres). Font sizes are points.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docreflow.constants import (
    DEFAULT_BLANK_GAP,
    DEFAULT_BULLET_GAP_AFTER,
    DEFAULT_BULLET_INDENT,
    DEFAULT_CREATOR,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_HEADER_FONT_NAME,
    DEFAULT_HEADER_FONT_SIZE,
    DEFAULT_HEADER_GAP_AFTER,
    DEFAULT_HEADER_GAP_BEFORE,
    DEFAULT_HEADER_GREY,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_LINE_HEIGHT_FACTOR,
    DEFAULT_MARGIN,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PARAGRAPH_GAP_AFTER,
    DEFAULT_TEXT_GREY,
    PAGE_SIZES_MM,
    PageSize,
)
from docreflow.options.base import BaseOptions


@dataclass(frozen=True)
class PageGeometry:
    """Page width, height and uniform margin in layout units."""

    width: float
    height: float
    margin: float

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Largest cursor offset at which a line may still start on this page."""
        return self.height - self.margin


@dataclass(frozen=True)
class LayoutOptions(BaseOptions):
    """Configuration for the paginated renderer and the PDF surface.

    Parameters
    ----------
    page_size : {"a4", "letter", "legal"}, default "a4"
        Output page size.
    margin : float, default 20.0
        Margin on every side. Text starts at ``margin`` from the top.
    blank_gap : float, default 6.0
        Vertical advance for a blank line.
    header_gap_before, header_gap_after : float, default 4.0, 8.0
        Advance before and after drawing a header.
    line_height : float, default 5.0
        Advance per wrapped line of a bullet or paragraph.
    bullet_indent : float, default 5.0
        Horizontal offset of bullet text from the bullet glyph.
    bullet_gap_after, paragraph_gap_after : float, default 3.0, 2.0
        Extra advance after a bullet block or paragraph block.
    font_name, header_font_name : str
        ReportLab font names for body text and headers.
    font_size, header_font_size : float
        Font sizes in points.
    text_grey, header_grey : int
        Text grey level, 0 (black) to 255 (white).
    line_height_factor : float, default 1.15
        Leading of multi-line blocks as a multiple of the font size.
    creator : str or None, default "docreflow"
        Creator recorded in the PDF metadata.

    """

    page_size: PageSize = field(
        default=DEFAULT_PAGE_SIZE,
        metadata={"help": "Page size: a4, letter, or legal", "choices": ["a4", "letter", "legal"]},
    )
    margin: float = field(default=DEFAULT_MARGIN, metadata={"help": "Page margin in mm", "type": float})
    blank_gap: float = field(default=DEFAULT_BLANK_GAP, metadata={"help": "Advance for a blank line", "type": float})
    header_gap_before: float = field(
        default=DEFAULT_HEADER_GAP_BEFORE, metadata={"help": "Advance before a header", "type": float}
    )
    header_gap_after: float = field(
        default=DEFAULT_HEADER_GAP_AFTER, metadata={"help": "Advance after a header", "type": float}
    )
    line_height: float = field(
        default=DEFAULT_LINE_HEIGHT, metadata={"help": "Advance per wrapped line", "type": float}
    )
    bullet_indent: float = field(
        default=DEFAULT_BULLET_INDENT, metadata={"help": "Indent of bullet text", "type": float}
    )
    bullet_gap_after: float = field(
        default=DEFAULT_BULLET_GAP_AFTER, metadata={"help": "Advance after a bullet block", "type": float}
    )
    paragraph_gap_after: float = field(
        default=DEFAULT_PARAGRAPH_GAP_AFTER, metadata={"help": "Advance after a paragraph block", "type": float}
    )
    font_name: str = field(default=DEFAULT_FONT_NAME, metadata={"help": "Body font"})
    header_font_name: str = field(default=DEFAULT_HEADER_FONT_NAME, metadata={"help": "Header font"})
    font_size: float = field(default=DEFAULT_FONT_SIZE, metadata={"help": "Body font size (pt)", "type": float})
    header_font_size: float = field(
        default=DEFAULT_HEADER_FONT_SIZE, metadata={"help": "Header font size (pt)", "type": float}
    )
    text_grey: int = field(default=DEFAULT_TEXT_GREY, metadata={"help": "Body text grey level 0-255", "type": int})
    header_grey: int = field(default=DEFAULT_HEADER_GREY, metadata={"help": "Header grey level 0-255", "type": int})
    line_height_factor: float = field(
        default=DEFAULT_LINE_HEIGHT_FACTOR, metadata={"help": "Leading as a multiple of font size", "type": float}
    )
    creator: str | None = field(default=DEFAULT_CREATOR, metadata={"help": "PDF creator metadata"})

    def __post_init__(self) -> None:
        """Validate page size and numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.page_size not in PAGE_SIZES_MM:
            raise ValueError(f"page_size must be one of {sorted(PAGE_SIZES_MM)}, got {self.page_size!r}")

        width, height = PAGE_SIZES_MM[self.page_size]
        if self.margin < 0 or 2 * self.margin >= min(width, height):
            raise ValueError(f"margin must be non-negative and smaller than half the page, got {self.margin}")

        for name in (
            "blank_gap",
            "header_gap_before",
            "header_gap_after",
            "bullet_indent",
            "bullet_gap_after",
            "paragraph_gap_after",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

        for name in ("line_height", "font_size", "header_font_size", "line_height_factor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

        for name in ("text_grey", "header_grey"):
            if not 0 <= getattr(self, name) <= 255:
                raise ValueError(f"{name} must be between 0 and 255, got {getattr(self, name)}")

    def geometry(self) -> PageGeometry:
        """Return the page geometry described by these options."""
        width, height = PAGE_SIZES_MM[self.page_size]
        return PageGeometry(width=width, height=height, margin=self.margin)
