#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_exceptions.py
"""Unit tests for the exception hierarchy and logging setup."""

import logging

import pytest

from docreflow.exceptions import (
    DependencyError,
    DocReflowError,
    FileError,
    FileNotFoundError,
    FormatError,
    InvalidOptionsError,
    MalformedFileError,
    OutputWriteError,
    PageRangeError,
    ParsingError,
    PasswordProtectedError,
    RenderingError,
    ValidationError,
)
from docreflow.logging_utils import configure_logging, resolve_log_level


@pytest.mark.unit
class TestHierarchy:
    @pytest.mark.parametrize(
        "error, parents",
        [
            (InvalidOptionsError("pdf", int, str), (ValidationError,)),
            (PageRangeError("bad"), (ValidationError,)),
            (FileNotFoundError("x"), (FileError,)),
            (MalformedFileError("x"), (FileError,)),
            (PasswordProtectedError(), (ParsingError,)),
            (OutputWriteError("out.pdf"), (RenderingError,)),
            (FormatError(), ()),
            (DependencyError("pdf", []), ()),
        ],
    )
    def test_everything_is_a_docreflow_error(self, error, parents):
        assert isinstance(error, DocReflowError)
        for parent in parents:
            assert isinstance(error, parent)

    def test_original_error_kept(self):
        cause = OSError("disk full")
        error = OutputWriteError("out.pdf", original_error=cause)
        assert error.original_error is cause
        assert error.rendering_stage == "file_write"
        assert str(error) == "Could not write PDF to out.pdf"

    def test_default_messages(self):
        assert str(FileNotFoundError("cv.pdf")) == "No such source file: cv.pdf"
        assert "password-protected" in str(PasswordProtectedError(filename="cv.pdf"))
        assert str(FormatError(format_type="rtf", supported_formats=["pdf"])) == (
            "Cannot read format 'rtf' (choose from: pdf)"
        )
        assert str(InvalidOptionsError("pdf decoder", int, str)) == "The pdf decoder takes int, not str."

    def test_page_range_parameter(self):
        error = PageRangeError("bad", parameter_value="x")
        assert (error.parameter_name, error.parameter_value) == ("pages", "x")


@pytest.mark.unit
class TestLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_resolve_level(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level(logging.ERROR) == logging.ERROR
        assert resolve_log_level("nonsense") == logging.INFO

    def test_configure_console(self):
        logger = configure_logging("DEBUG")
        root = logging.getLogger()
        assert logger.name == "docreflow"
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("reportlab").level == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "docreflow.log"
        configure_logging("INFO", log_file=str(log_file), trace_mode=True)
        logging.getLogger("docreflow.test").info("hello from layout")
        for handler in logging.getLogger().handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "[docreflow.test] hello from layout" in content

    def test_unwritable_log_file(self, tmp_path):
        configure_logging("INFO", log_file=str(tmp_path / "missing" / "x.log"))
        assert len(logging.getLogger().handlers) == 1
