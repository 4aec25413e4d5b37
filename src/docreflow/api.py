#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/api.py
"""High-level entry points.

- ``extract_text``: source document to plain text (PDF pages are rebuilt
  from positioned fragments; DOCX and text files are read as they are)
- ``layout_text``: marked-up text to draw instructions
- ``render_pdf``: marked-up text to a paginated PDF file

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Union

from docreflow.constants import DEFAULT_GAP_THRESHOLD, DEFAULT_OUTPUT_FILENAME, SourceFormat
from docreflow.exceptions import DocReflowError, ParsingError
from docreflow.layout import DrawInstruction, Paginator, TextMeasurer
from docreflow.options.extraction import ExtractionOptions
from docreflow.options.layout import LayoutOptions
from docreflow.parsers import detect_format, get_decoder
from docreflow.reconstruct import Fragment, reconstruct_document
from docreflow.utils.decorators import debug_timer
from docreflow.utils.inputs import SourceInput

logger = logging.getLogger(__name__)


def extract_text(
    source: SourceInput,
    source_format: SourceFormat = "auto",
    options: ExtractionOptions | None = None,
) -> str:
    """Read a document and return its text.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Document to read
    source_format : {"auto", "pdf", "docx", "txt"}, default "auto"
        Format of ``source``; "auto" detects it from the extension or content
    options : ExtractionOptions or None, default None
        Gap threshold, page selection, password

    Returns
    -------
    str
        Extracted text. PDF pages each end with a blank line.

    Raises
    ------
    DocReflowError
        Library errors from decoding pass through unchanged
    ParsingError
        Any other failure while reading the file

    Examples
    --------
        >>> text = extract_text("resume.pdf")
        >>> text = extract_text("resume.pdf", options=ExtractionOptions(gap_threshold=8))

    """
    resolved_format = detect_format(source) if source_format == "auto" else source_format
    logger.debug(f"Reading source as {resolved_format}")
    decoder = get_decoder(resolved_format, options)

    try:
        with debug_timer(logger, f"Extraction ({resolved_format})"):
            return decoder.extract_text(source)
    except DocReflowError:
        raise
    except Exception as e:
        raise ParsingError(f"Failed to read file: {e}", parsing_stage="extraction", original_error=e) from e


def reconstruct(pages: Iterable[Iterable[Fragment]], gap_threshold: float = DEFAULT_GAP_THRESHOLD) -> str:
    """Rebuild document text from fragment streams produced by any page decoder."""
    return reconstruct_document(pages, gap_threshold)


def layout_text(
    text: str,
    options: LayoutOptions | None = None,
    measure: TextMeasurer | None = None,
) -> list[DrawInstruction]:
    """Paginate ``text`` into draw instructions.

    Parameters
    ----------
    text : str
        Text with ``###`` headers, ``-`` bullets and blank-line separators
    options : LayoutOptions or None, default None
        Page and spacing settings
    measure : TextMeasurer or None, default None
        Word-wrap primitive; ReportLab font metrics when None

    """
    options = options or LayoutOptions()
    if measure is None:
        from docreflow.renderers.pdf import ReportLabMeasurer

        measure = ReportLabMeasurer(options)
    return Paginator(measure, options).render(text)


def render_pdf(
    text: str,
    output: Union[str, Path, IO[bytes]] = DEFAULT_OUTPUT_FILENAME,
    options: LayoutOptions | None = None,
) -> int:
    """Render ``text`` to a PDF at ``output`` and return the page count."""
    from docreflow.renderers.pdf import PdfRenderer

    return PdfRenderer(options).render(text, output)
