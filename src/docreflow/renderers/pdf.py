#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/renderers/pdf.py
"""PDF output with ReportLab.

This module supplies the two backend capabilities the paginator relies on:

- ``ReportLabMeasurer`` wraps text to a width using ReportLab font metrics.
- ``PdfSurface`` replays draw instructions on a ReportLab canvas and saves
  the result.

``PdfRenderer`` ties them to the paginator: text in, PDF file out.

Layout coordinates are millimetres measured down from the top edge of the
page. The canvas works in points measured up from the bottom edge, so
every placement is flipped on the way in.

"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Iterable, Sequence, Union

from docreflow.constants import DEFAULT_OUTPUT_FILENAME, DEPS_PDF_RENDER
from docreflow.exceptions import DependencyError, InvalidOptionsError, OutputWriteError, RenderingError
from docreflow.layout import (
    DrawInstruction,
    FontRole,
    PageBreak,
    Paginator,
    PlaceBulletGlyph,
    PlaceText,
)
from docreflow.options.layout import LayoutOptions
from docreflow.utils.decorators import debug_timer, requires_dependencies

if TYPE_CHECKING:
    from reportlab.pdfgen.canvas import Canvas

logger = logging.getLogger(__name__)


def _font_for(options: LayoutOptions, role: FontRole) -> tuple[str, float, int]:
    """Return (font name, size in points, grey level 0-255) for a font role."""
    if role is FontRole.HEADER:
        return options.header_font_name, options.header_font_size, options.header_grey
    return options.font_name, options.font_size, options.text_grey


class ReportLabMeasurer:
    """Word-wrap text with ReportLab's ``simpleSplit``.

    Widths are given in layout units (mm) and converted to points before
    measuring with the font of the requested role.
    """

    @requires_dependencies("pdf_render", DEPS_PDF_RENDER)
    def __init__(self, options: LayoutOptions | None = None):
        from reportlab.lib.units import mm
        from reportlab.lib.utils import simpleSplit

        self.options = options or LayoutOptions()
        self._split = simpleSplit
        self._mm = mm

    def __call__(self, text: str, max_width: float, font: FontRole) -> list[str]:
        font_name, font_size, _grey = _font_for(self.options, font)
        return self._split(text, font_name, font_size, max_width * self._mm)


class PdfSurface:
    """A ReportLab canvas that accepts draw instructions.

    Parameters
    ----------
    output : str, Path, or IO[bytes]
        Destination written by ``save()``
    options : LayoutOptions or None, default None
        Page size, fonts and colours

    """

    @requires_dependencies("pdf_render", DEPS_PDF_RENDER)
    def __init__(self, output: Union[str, Path, IO[bytes]], options: LayoutOptions | None = None):
        from reportlab.lib.units import mm
        from reportlab.pdfgen.canvas import Canvas

        self.options = options or LayoutOptions()
        self._mm = mm
        self._geometry = self.options.geometry()
        self._canvas: Canvas = Canvas(
            str(output) if isinstance(output, Path) else output,
            pagesize=(self._geometry.width * mm, self._geometry.height * mm),
        )
        if self.options.creator:
            self._canvas.setCreator(self.options.creator)
        self.page_count = 1

    def _to_canvas(self, x: float, y: float) -> tuple[float, float]:
        return x * self._mm, (self._geometry.height - y) * self._mm

    def _set_font(self, role: FontRole) -> float:
        """Activate the font of ``role`` and return its leading in points."""
        font_name, font_size, grey = _font_for(self.options, role)
        self._canvas.setFont(font_name, font_size)
        self._canvas.setFillGray(grey / 255)
        return font_size * self.options.line_height_factor

    def draw(self, instruction: DrawInstruction) -> None:
        """Apply a single instruction to the canvas."""
        if isinstance(instruction, PageBreak):
            self._canvas.showPage()
            self.page_count += 1
        elif isinstance(instruction, PlaceBulletGlyph):
            self._set_font(FontRole.NORMAL)
            self._canvas.drawString(*self._to_canvas(instruction.x, instruction.y), instruction.glyph)
        elif isinstance(instruction, PlaceText):
            leading = self._set_font(instruction.font)
            x, y = self._to_canvas(instruction.x, instruction.y)
            for index, line in enumerate(instruction.lines):
                self._canvas.drawString(x, y - index * leading, line)
        else:
            raise RenderingError(
                f"Unknown draw instruction: {type(instruction).__name__}", rendering_stage="drawing"
            )

    def replay(self, instructions: Iterable[DrawInstruction]) -> None:
        for instruction in instructions:
            self.draw(instruction)

    def save(self) -> None:
        """Finish the last page and write the document."""
        self._canvas.save()


class PdfRenderer:
    """Render marked-up text to a paginated PDF.

    Parameters
    ----------
    options : LayoutOptions or None, default None
        Layout, font and page settings

    Examples
    --------
        >>> renderer = PdfRenderer()
        >>> renderer.render("### Summary\\nBuilt things.", "Optimized_CV.pdf")

    """

    def __init__(self, options: LayoutOptions | None = None):
        if options is not None and not isinstance(options, LayoutOptions):
            raise InvalidOptionsError("pdf renderer", LayoutOptions, type(options))
        self.options = options or LayoutOptions()
        self.paginator = Paginator(ReportLabMeasurer(self.options), self.options)

    def layout(self, text: str) -> list[DrawInstruction]:
        """Return the draw instructions for ``text`` without drawing them."""
        with debug_timer(logger, "Layout"):
            return self.paginator.render(text)

    def render(self, text: str, output: Union[str, Path, IO[bytes]] = DEFAULT_OUTPUT_FILENAME) -> int:
        """Lay out ``text``, draw it and save the PDF.

        Returns
        -------
        int
            Number of pages written

        Raises
        ------
        OutputWriteError
            If the output file cannot be written
        RenderingError
            If drawing fails

        """
        instructions: Sequence[DrawInstruction] = self.layout(text)
        try:
            surface = PdfSurface(output, self.options)
            surface.replay(instructions)
            with debug_timer(logger, "PDF save"):
                surface.save()
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e
        except (DependencyError, RenderingError):
            raise
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="rendering", original_error=e) from e

        logger.info(f"Wrote {surface.page_count} page(s) to {output}")
        return surface.page_count

    def render_to_bytes(self, text: str) -> bytes:
        """Render ``text`` and return the PDF content."""
        buffer = io.BytesIO()
        self.render(text, buffer)
        return buffer.getvalue()
