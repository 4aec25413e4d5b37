#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the docreflow library.

This module centralizes the heuristic thresholds, layout spacings and
dependency tables used across docreflow.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Reconstruction - Fragment line-grouping heuristic
3. Classification - Line markup markers
4. Layout - Page geometry, spacings and fonts
5. Dependencies - Package requirements per format
6. Format Detection - Extensions and magic bytes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

PageSize = Literal["a4", "letter", "legal"]
SourceFormat = Literal["auto", "pdf", "docx", "txt"]

# =============================================================================
# Reconstruction
# =============================================================================

# Vertical distance (source units) above which two fragments sit on different lines
DEFAULT_GAP_THRESHOLD = 6.0

LINE_BREAK = "\n"
PARAGRAPH_SEPARATOR = "\n\n"

# =============================================================================
# Classification
# =============================================================================

HEADER_MARKER = "###"
EMPHASIS_MARKER = "**"
BULLET_MARKERS = ("-", "*", "•")

# Lines wrapped entirely in ** and shorter than this are treated as headers
EMPHASIS_HEADER_MAX_LENGTH = 40

# =============================================================================
# Layout
# =============================================================================

# Layout units are millimetres; page sizes are (width, height)
PAGE_SIZES_MM: dict[str, tuple[float, float]] = {
    "a4": (210.0, 297.0),
    "letter": (215.9, 279.4),
    "legal": (215.9, 355.6),
}

DEFAULT_PAGE_SIZE: PageSize = "a4"
DEFAULT_MARGIN = 20.0

DEFAULT_BLANK_GAP = 6.0
DEFAULT_HEADER_GAP_BEFORE = 4.0
DEFAULT_HEADER_GAP_AFTER = 8.0
DEFAULT_LINE_HEIGHT = 5.0
DEFAULT_BULLET_INDENT = 5.0
DEFAULT_BULLET_GAP_AFTER = 3.0
DEFAULT_PARAGRAPH_GAP_AFTER = 2.0

BULLET_GLYPH = "•"

DEFAULT_FONT_NAME = "Helvetica"
DEFAULT_HEADER_FONT_NAME = "Helvetica-Bold"
DEFAULT_FONT_SIZE = 11.0
DEFAULT_HEADER_FONT_SIZE = 14.0
# Grey levels on a 0-255 scale
DEFAULT_TEXT_GREY = 40
DEFAULT_HEADER_GREY = 0
DEFAULT_LINE_HEIGHT_FACTOR = 1.15

DEFAULT_OUTPUT_FILENAME = "Optimized_CV.pdf"
DEFAULT_CREATOR = "docreflow"

# =============================================================================
# Dependencies
# =============================================================================

# (install_name, import_name, version_spec)
DEPS_PDF = [("pymupdf", "fitz", ">=1.26.4")]
DEPS_DOCX = [("python-docx", "docx", "")]
DEPS_PDF_RENDER = [("reportlab", "reportlab", ">=4.0.0")]

PDF_MIN_PYMUPDF_VERSION = "1.26.4"

# =============================================================================
# Format Detection
# =============================================================================

EXTENSION_FORMATS: dict[str, str] = {
    ".pdf": "pdf",
    ".docx": "docx",
}

PDF_MAGIC = b"%PDF"
ZIP_MAGIC = b"PK\x03\x04"
DOCX_CONTENT_MARKER = "word/document.xml"

# Encodings tried in order when decoding plain text
DEFAULT_FALLBACK_ENCODINGS = ["utf-8-sig", "utf-8", "latin-1"]
