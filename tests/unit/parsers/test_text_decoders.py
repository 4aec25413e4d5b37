#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_text_decoders.py
"""Unit tests for the plain-text and DOCX decoders."""

import io

import pytest

from docreflow.exceptions import FileNotFoundError as DocReflowFileNotFoundError
from docreflow.exceptions import MalformedFileError, ValidationError
from docreflow.options import ExtractionOptions
from docreflow.parsers import DocxTextDecoder, PlainTextDecoder


@pytest.mark.unit
class TestPlainTextDecoder:
    def test_path(self, tmp_path):
        path = tmp_path / "cv.txt"
        path.write_text("### Skills\n- Python\n", encoding="utf-8")
        assert PlainTextDecoder().extract_text(path) == "### Skills\n- Python\n"

    def test_bytes_with_bom(self):
        data = "\ufeff• Café".encode("utf-8")
        assert PlainTextDecoder(ExtractionOptions(use_chardet=False)).extract_text(data) == "• Café"

    def test_latin1_fallback(self):
        data = "Résumé".encode("latin-1")
        assert PlainTextDecoder(ExtractionOptions(use_chardet=False)).extract_text(data) == "Résumé"

    def test_text_stream(self):
        assert PlainTextDecoder().extract_text(io.StringIO("plain")) == "plain"

    def test_missing_path(self, tmp_path):
        with pytest.raises(DocReflowFileNotFoundError):
            PlainTextDecoder().extract_text(tmp_path / "missing.txt")

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(ValidationError):
            PlainTextDecoder().extract_text(tmp_path)

    def test_unsupported_input(self):
        with pytest.raises(ValidationError):
            PlainTextDecoder().extract_text(42)


@pytest.mark.unit
class TestDocxTextDecoder:
    @pytest.fixture
    def docx_bytes(self):
        docx = pytest.importorskip("docx")
        document = docx.Document()
        document.add_paragraph("Jane Smith")
        table = document.add_table(rows=1, cols=2)
        table.cell(0, 0).text = "Python"
        table.cell(0, 1).text = "Go"
        document.add_paragraph("- Built pipelines")
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def test_paragraphs_and_cells_in_order(self, docx_bytes):
        text = DocxTextDecoder().extract_text(docx_bytes)
        assert text == "Jane Smith\n\nPython\n\nGo\n\n- Built pipelines\n\n"

    def test_path_input(self, docx_bytes, tmp_path):
        path = tmp_path / "cv.docx"
        path.write_bytes(docx_bytes)
        assert DocxTextDecoder().extract_text(path).startswith("Jane Smith\n\n")

    def test_malformed(self):
        pytest.importorskip("docx")
        with pytest.raises(MalformedFileError):
            DocxTextDecoder().extract_text(b"not a zip archive")
