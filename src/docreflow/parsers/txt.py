#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/parsers/txt.py
"""Plain-text sources, the fallback for every unrecognized format."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Union

from docreflow.parsers.base import BaseDecoder
from docreflow.utils.encoding import normalize_stream_to_bytes, read_text_with_encoding_detection
from docreflow.utils.inputs import validate_and_convert_input


class PlainTextDecoder(BaseDecoder):
    """Decode a text file, detecting its encoding."""

    format_name = "txt"

    def extract_text(self, input_data: Union[str, Path, IO[bytes], bytes]) -> str:
        doc_input, input_type = validate_and_convert_input(input_data)
        if input_type == "path":
            data = Path(doc_input).read_bytes()
        else:
            data = normalize_stream_to_bytes(doc_input)
        return read_text_with_encoding_detection(data, use_chardet=self.options.use_chardet)
