#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/layout.py
"""Paginate classified text into replayable draw instructions.

The paginator walks the classified lines once, in order, threading a
``RenderCursor`` through a pure per-line step. Each step may emit a
``PageBreak`` (when the cursor has passed the bottom margin), then the
placements for the line, and returns the advanced cursor.

Word wrapping is not done here. A ``TextMeasurer`` (font metrics belong
to the drawing backend) splits a string into lines that fit a width, and
the paginator only uses the number of lines it gets back to advance the
cursor. The same text, geometry and measurer always give the same
instructions.

A wrapped block taller than the remaining page is drawn in one piece and
may run past the bottom margin; the following line then triggers the
page break.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Protocol, Sequence, Union

from docreflow.classify import DocumentLine, LineKind, classify_text
from docreflow.constants import BULLET_GLYPH
from docreflow.exceptions import InvalidOptionsError
from docreflow.options.layout import LayoutOptions, PageGeometry

logger = logging.getLogger(__name__)


class FontRole(Enum):
    """Font used for a text placement."""

    NORMAL = "normal"
    HEADER = "header"


class TextMeasurer(Protocol):
    """Split ``text`` into lines no wider than ``max_width`` in ``font``."""

    def __call__(self, text: str, max_width: float, font: FontRole) -> Sequence[str]: ...


@dataclass(frozen=True)
class PlaceText:
    """Draw ``lines`` as a block whose first baseline is at (x, y)."""

    lines: tuple[str, ...]
    x: float
    y: float
    font: FontRole = FontRole.NORMAL


@dataclass(frozen=True)
class PlaceBulletGlyph:
    """Draw a bullet glyph at (x, y)."""

    x: float
    y: float
    glyph: str = BULLET_GLYPH


@dataclass(frozen=True)
class PageBreak:
    """Finish the current page and start a new one."""


DrawInstruction = Union[PlaceText, PlaceBulletGlyph, PageBreak]


@dataclass(frozen=True)
class RenderCursor:
    """Pagination state between lines: vertical offset from the top and active font."""

    y: float
    font: FontRole = FontRole.NORMAL


class Paginator:
    """Turn marked-up text into an ordered list of draw instructions.

    Parameters
    ----------
    measure : TextMeasurer
        Word-wrap primitive of the drawing backend
    options : LayoutOptions or None, default None
        Spacing and page settings
    geometry : PageGeometry or None, default None
        Overrides the geometry derived from ``options.page_size`` and
        ``options.margin``

    Examples
    --------
        >>> from docreflow.renderers.pdf import ReportLabMeasurer
        >>> options = LayoutOptions()
        >>> paginator = Paginator(ReportLabMeasurer(options), options)
        >>> instructions = paginator.render("### Summary\\nBuilt things.")

    """

    def __init__(
        self,
        measure: TextMeasurer,
        options: LayoutOptions | None = None,
        geometry: PageGeometry | None = None,
    ):
        if options is not None and not isinstance(options, LayoutOptions):
            raise InvalidOptionsError("paginator", LayoutOptions, type(options))
        self.options = options or LayoutOptions()
        self.geometry = geometry or self.options.geometry()
        self.measure = measure

    def initial_cursor(self) -> RenderCursor:
        return RenderCursor(y=self.geometry.margin)

    def step(self, cursor: RenderCursor, line: DocumentLine) -> tuple[RenderCursor, list[DrawInstruction]]:
        """Process one classified line.

        Returns
        -------
        tuple
            The advanced cursor and the instructions emitted for the line

        """
        instructions: list[DrawInstruction] = []
        geometry = self.geometry
        opts = self.options

        if cursor.y > geometry.bottom_limit:
            instructions.append(PageBreak())
            cursor = replace(cursor, y=geometry.margin)

        if line.kind is LineKind.BLANK:
            return replace(cursor, y=cursor.y + opts.blank_gap), instructions

        if line.kind is LineKind.HEADER:
            y = cursor.y + opts.header_gap_before
            instructions.append(PlaceText((line.content,), geometry.margin, y, FontRole.HEADER))
            return RenderCursor(y=y + opts.header_gap_after, font=FontRole.NORMAL), instructions

        if line.kind is LineKind.BULLET:
            lines = self._wrap(line.content, geometry.content_width - opts.bullet_indent, cursor.font)
            instructions.append(PlaceBulletGlyph(geometry.margin, cursor.y))
            instructions.append(PlaceText(lines, geometry.margin + opts.bullet_indent, cursor.y, cursor.font))
            return replace(cursor, y=cursor.y + opts.line_height * len(lines) + opts.bullet_gap_after), instructions

        lines = self._wrap(line.content, geometry.content_width, cursor.font)
        instructions.append(PlaceText(lines, geometry.margin, cursor.y, cursor.font))
        return replace(cursor, y=cursor.y + opts.line_height * len(lines) + opts.paragraph_gap_after), instructions

    def _wrap(self, text: str, max_width: float, font: FontRole) -> tuple[str, ...]:
        # An empty result still occupies one line, as "" does in the measurer
        return tuple(self.measure(text, max_width, font)) or ("",)

    def iter_instructions(self, text: str) -> Iterator[DrawInstruction]:
        """Yield instructions for ``text`` line by line."""
        cursor = self.initial_cursor()
        for line in classify_text(text):
            cursor, instructions = self.step(cursor, line)
            yield from instructions

    def render(self, text: str) -> list[DrawInstruction]:
        """Return every instruction for ``text`` in drawing order."""
        instructions = list(self.iter_instructions(text))
        logger.debug(f"Laid out {len(instructions)} instructions over {count_pages(instructions)} page(s)")
        return instructions


def render(
    text: str,
    geometry: PageGeometry,
    measure: TextMeasurer,
    options: LayoutOptions | None = None,
) -> list[DrawInstruction]:
    """Lay out ``text`` on pages of ``geometry`` using ``measure`` for wrapping."""
    return Paginator(measure, options, geometry).render(text)


def count_pages(instructions: Sequence[DrawInstruction]) -> int:
    """Number of pages the instructions fill: one plus the page breaks."""
    return 1 + sum(1 for instruction in instructions if isinstance(instruction, PageBreak))
