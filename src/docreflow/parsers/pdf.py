#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/parsers/pdf.py
"""PDF page-content decoding with PyMuPDF.

``PdfFragmentDecoder`` opens a PDF and emits, per page, the text spans of
the page as ``Fragment`` objects in PyMuPDF's content-stream order. Span
positions are converted to the bottom-up PDF coordinate system (the
baseline's distance from the bottom edge), so positions decrease going
down a page. ``extract_text`` feeds those fragments to the reconstructor.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Iterator, Union

from docreflow.constants import DEPS_PDF, PDF_MIN_PYMUPDF_VERSION
from docreflow.exceptions import DependencyError, MalformedFileError, PasswordProtectedError
from docreflow.parsers.base import BaseDecoder
from docreflow.reconstruct import Fragment, FragmentReconstructor
from docreflow.utils.decorators import debug_timer, requires_dependencies
from docreflow.utils.encoding import normalize_stream_to_bytes
from docreflow.utils.inputs import source_name, validate_and_convert_input, validate_page_range

if TYPE_CHECKING:
    import fitz

logger = logging.getLogger(__name__)

# PyMuPDF block type for text; image blocks (type 1) carry no spans
_TEXT_BLOCK = 0


def _check_pymupdf_version() -> None:
    """Check that the imported PyMuPDF meets the minimum version.

    Raises
    ------
    DependencyError
        If PyMuPDF version is too old

    """
    import fitz

    min_version = tuple(map(int, PDF_MIN_PYMUPDF_VERSION.split(".")))
    if tuple(fitz.pymupdf_version_tuple) < min_version:
        raise DependencyError(
            converter_name="pdf",
            missing_packages=[],
            version_mismatches=[
                ("pymupdf", f">={PDF_MIN_PYMUPDF_VERSION}", ".".join(map(str, fitz.pymupdf_version_tuple)))
            ],
        )


def page_fragments(page: "fitz.Page") -> list[Fragment]:
    """Return the text spans of ``page`` as fragments, in stream order.

    A span without an ``origin`` (no transform) gets position 0.
    """
    page_height = page.rect.height
    fragments = []

    for block in page.get_text("dict", sort=False).get("blocks", []):
        if block.get("type", _TEXT_BLOCK) != _TEXT_BLOCK:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                origin = span.get("origin")
                y = page_height - origin[1] if origin else 0.0
                fragments.append(Fragment(text=span.get("text", ""), y=y))

    return fragments


class PdfFragmentDecoder(BaseDecoder):
    """Decode PDF files into per-page fragment streams.

    Parameters
    ----------
    options : ExtractionOptions or None, default None
        ``pages``, ``password`` and ``gap_threshold`` are used.

    Examples
    --------
        >>> decoder = PdfFragmentDecoder()
        >>> text = decoder.extract_text("resume.pdf")

    """

    format_name = "pdf"

    @requires_dependencies("pdf", DEPS_PDF)
    def open(self, input_data: Union[str, Path, IO[bytes], bytes]) -> "fitz.Document":
        """Open and, when encrypted, authenticate a PDF document.

        Raises
        ------
        MalformedFileError
            If PyMuPDF cannot open the document
        PasswordProtectedError
            If the document is encrypted and no or a wrong password is set

        """
        import fitz

        _check_pymupdf_version()

        doc_input, input_type = validate_and_convert_input(input_data)
        filename = source_name(input_data)

        try:
            if input_type == "path":
                doc = fitz.open(filename=str(doc_input))
            else:
                doc = fitz.open(stream=normalize_stream_to_bytes(doc_input), filetype="pdf")
        except Exception as e:
            raise MalformedFileError(
                f"Failed to open PDF document: {e!r}", file_path=filename, original_error=e
            ) from e

        try:
            self._unlock(doc, filename)
        except PasswordProtectedError:
            doc.close()
            raise

        return doc

    def _unlock(self, doc: Any, filename: str | None) -> None:
        if not doc.is_encrypted:
            return
        if not self.options.password:
            raise PasswordProtectedError(
                message="PDF document is password-protected. Please provide a password using the 'password' option.",
                filename=filename,
            )
        # authenticate() returns 0 on failure
        if doc.authenticate(self.options.password) == 0:
            raise PasswordProtectedError(
                message="Failed to authenticate PDF with provided password. Please check the password is correct.",
                filename=filename,
            )

    def pages_to_use(self, doc: Any) -> list[int]:
        """Return the 0-based page indices selected by ``options.pages``."""
        selected = validate_page_range(self.options.pages, doc.page_count)
        return selected if selected is not None else list(range(doc.page_count))

    def iter_pages(self, doc: Any) -> Iterator[list[Fragment]]:
        """Yield the fragment stream of each selected page in page order."""
        for page_index in self.pages_to_use(doc):
            fragments = page_fragments(doc[page_index])
            logger.debug(f"Page {page_index + 1}: {len(fragments)} fragments")
            yield fragments

    def decode(self, input_data: Union[str, Path, IO[bytes], bytes]) -> list[list[Fragment]]:
        """Open ``input_data`` and return the fragments of every selected page."""
        doc = self.open(input_data)
        try:
            return list(self.iter_pages(doc))
        finally:
            doc.close()

    def extract_text(self, input_data: Union[str, Path, IO[bytes], bytes]) -> str:
        """Decode the PDF and reconstruct its text page by page."""
        with debug_timer(logger, "PDF decoding"):
            pages = self.decode(input_data)
        return FragmentReconstructor(self.options).reconstruct_document(pages)
