#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/parsers/docx.py
"""Raw text extraction from Word (DOCX) documents with python-docx.

The text is already line-structured, so it bypasses fragment
reconstruction. Each paragraph, including paragraphs inside table cells,
is emitted in document order followed by a blank line.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Iterator

from docreflow.constants import DEPS_DOCX, PARAGRAPH_SEPARATOR
from docreflow.exceptions import MalformedFileError
from docreflow.parsers.base import BaseDecoder
from docreflow.utils.decorators import requires_dependencies
from docreflow.utils.inputs import source_name, validate_and_convert_input

if TYPE_CHECKING:
    import docx.document

logger = logging.getLogger(__name__)


def _iter_paragraph_texts(parent: Any) -> Iterator[str]:
    """Yield paragraph texts of a document or table cell in body order."""
    import docx.document
    from docx.table import Table
    from docx.text.paragraph import Paragraph

    parent_elm = parent.element.body if isinstance(parent, docx.document.Document) else parent._element

    for child in parent_elm.iterchildren():
        if child.tag.endswith("}p"):
            yield Paragraph(child, parent).text
        elif child.tag.endswith("}tbl"):
            for row in Table(child, parent).rows:
                for cell in row.cells:
                    yield from _iter_paragraph_texts(cell)


class DocxTextDecoder(BaseDecoder):
    """Extract the raw text of a DOCX document."""

    format_name = "docx"

    @requires_dependencies("docx", DEPS_DOCX)
    def open(self, input_data: str | Path | IO[bytes] | bytes) -> "docx.document.Document":
        """Load the document.

        Raises
        ------
        MalformedFileError
            If python-docx cannot read the file

        """
        import docx

        doc_input, input_type = validate_and_convert_input(input_data)
        try:
            return docx.Document(str(doc_input) if input_type == "path" else doc_input)
        except Exception as e:
            raise MalformedFileError(
                f"Failed to open DOCX document: {e!s}", file_path=source_name(input_data), original_error=e
            ) from e

    def extract_text(self, input_data: str | Path | IO[bytes] | bytes) -> str:
        """Return every paragraph of the document followed by a blank line."""
        doc = self.open(input_data)
        paragraphs = list(_iter_paragraph_texts(doc))
        logger.debug(f"DOCX: extracted {len(paragraphs)} paragraphs")
        return "".join(text + PARAGRAPH_SEPARATOR for text in paragraphs)
