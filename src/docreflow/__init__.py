"""docreflow - rebuild text from PDF layouts and paginate text back into PDF.

docreflow covers both directions of a resume-style document round trip:

- **Reconstruction**: positioned glyph fragments from each PDF page are
  grouped into lines by their vertical gaps, giving plain text with one
  blank line between pages. DOCX and text sources are read as they are.
- **Pagination**: text with light markers (``###`` headers, ``**bold**``
  headers, ``-``/``*``/``•`` bullets, blank lines) is classified line by
  line and laid out into draw instructions with automatic page breaks,
  which ReportLab replays into a PDF.

Requirements
------------
- Python 3.10+
- PyMuPDF for PDF sources, python-docx for DOCX sources, ReportLab for
  PDF output (each checked when first used)

Examples
--------
    >>> from docreflow import extract_text, render_pdf
    >>> text = extract_text("resume.pdf")
    >>> render_pdf(text, "Optimized_CV.pdf")
    1

Layout without drawing:

    >>> from docreflow import layout_text, LayoutOptions
    >>> instructions = layout_text("### Skills\\n- Python", LayoutOptions(page_size="letter"))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "docreflow requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from docreflow.api import extract_text, layout_text, reconstruct, render_pdf  # noqa: E402
from docreflow.classify import DocumentLine, LineKind, classify, classify_text  # noqa: E402
from docreflow.exceptions import (  # noqa: E402
    DependencyError,
    DocReflowError,
    FileError,
    FormatError,
    ParsingError,
    PasswordProtectedError,
    RenderingError,
    ValidationError,
)
from docreflow.layout import (  # noqa: E402
    DrawInstruction,
    FontRole,
    PageBreak,
    Paginator,
    PlaceBulletGlyph,
    PlaceText,
    RenderCursor,
    TextMeasurer,
)
from docreflow.options import ExtractionOptions, LayoutOptions, PageGeometry  # noqa: E402
from docreflow.reconstruct import Fragment, FragmentReconstructor, reconstruct_document, reconstruct_page  # noqa: E402

__all__ = [
    "__version__",
    # API
    "extract_text",
    "layout_text",
    "reconstruct",
    "render_pdf",
    # Reconstruction
    "Fragment",
    "FragmentReconstructor",
    "reconstruct_document",
    "reconstruct_page",
    # Classification
    "DocumentLine",
    "LineKind",
    "classify",
    "classify_text",
    # Layout
    "DrawInstruction",
    "FontRole",
    "PageBreak",
    "Paginator",
    "PlaceBulletGlyph",
    "PlaceText",
    "RenderCursor",
    "TextMeasurer",
    # Options
    "ExtractionOptions",
    "LayoutOptions",
    "PageGeometry",
    # Exceptions
    "DependencyError",
    "DocReflowError",
    "FileError",
    "FormatError",
    "ParsingError",
    "PasswordProtectedError",
    "RenderingError",
    "ValidationError",
]
