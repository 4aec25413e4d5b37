#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/parsers/__init__.py
"""Source decoders and format detection.

Formats are chosen from an explicit name, then the file extension, then
the leading bytes of the content. Anything unrecognized is read as plain
text.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Any

from docreflow.constants import DOCX_CONTENT_MARKER, EXTENSION_FORMATS, PDF_MAGIC, ZIP_MAGIC
from docreflow.exceptions import FormatError
from docreflow.options.extraction import ExtractionOptions
from docreflow.parsers.base import BaseDecoder
from docreflow.parsers.docx import DocxTextDecoder
from docreflow.parsers.pdf import PdfFragmentDecoder, page_fragments
from docreflow.parsers.txt import PlainTextDecoder
from docreflow.utils.inputs import is_file_like, is_path_like

logger = logging.getLogger(__name__)

DECODERS: dict[str, type[BaseDecoder]] = {
    "pdf": PdfFragmentDecoder,
    "docx": DocxTextDecoder,
    "txt": PlainTextDecoder,
}


def _sniff_bytes(head: bytes, data: Any) -> str:
    if head.startswith(PDF_MAGIC):
        return "pdf"
    if head.startswith(ZIP_MAGIC):
        try:
            with zipfile.ZipFile(data) as archive:
                if DOCX_CONTENT_MARKER in archive.namelist():
                    return "docx"
        except zipfile.BadZipFile:
            logger.debug("Content starts like a zip archive but is not one")
    return "txt"


def detect_format(input_data: Any) -> str:
    """Guess the format of ``input_data``: ``"pdf"``, ``"docx"`` or ``"txt"``.

    File-like inputs are rewound to where they started.
    """
    if is_path_like(input_data):
        suffix = Path(str(input_data)).suffix.lower()
        if suffix in EXTENSION_FORMATS:
            return EXTENSION_FORMATS[suffix]
        path = Path(str(input_data))
        if not path.is_file():
            return "txt"
        with path.open("rb") as f:
            return _sniff_bytes(f.read(len(PDF_MAGIC)), path)

    if isinstance(input_data, (bytes, bytearray)):
        return _sniff_bytes(bytes(input_data[: len(PDF_MAGIC)]), io.BytesIO(bytes(input_data)))

    if is_file_like(input_data) and hasattr(input_data, "seek"):
        start = input_data.tell()
        try:
            head = input_data.read(len(PDF_MAGIC))
            if not isinstance(head, bytes):
                return "txt"
            input_data.seek(start)
            return _sniff_bytes(head, input_data)
        finally:
            input_data.seek(start)

    return "txt"


def get_decoder(source_format: str, options: ExtractionOptions | None = None) -> BaseDecoder:
    """Instantiate the decoder registered for ``source_format``.

    Raises
    ------
    FormatError
        If no decoder handles the format

    """
    try:
        decoder_class = DECODERS[source_format]
    except KeyError:
        raise FormatError(format_type=source_format, supported_formats=sorted(DECODERS)) from None
    return decoder_class(options)


__all__ = [
    "BaseDecoder",
    "DECODERS",
    "DocxTextDecoder",
    "PdfFragmentDecoder",
    "PlainTextDecoder",
    "detect_format",
    "get_decoder",
    "page_fragments",
]
