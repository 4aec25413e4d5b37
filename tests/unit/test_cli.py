#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_cli.py
"""Unit tests for the docreflow command line."""

import json
import logging

import pytest

from docreflow import cli
from docreflow.exceptions import (
    DependencyError,
    DocReflowError,
    FileNotFoundError,
    FormatError,
    MalformedFileError,
    OutputWriteError,
    PageRangeError,
    ParsingError,
    PasswordProtectedError,
)
from docreflow.options import ExtractionOptions, LayoutOptions


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """No config discovery, and restore root logging after configure_logging()."""
    monkeypatch.setattr("docreflow.config.discover_config_file", lambda: None)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def resume_txt(tmp_path):
    path = tmp_path / "resume.txt"
    path.write_text("### Summary\nBuilds things.\n- Python\n", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    @pytest.mark.parametrize(
        "error, code",
        [
            (PasswordProtectedError(), cli.EXIT_PASSWORD_ERROR),
            (DependencyError("pdf", [("pymupdf", ">=1.26.4")]), cli.EXIT_DEPENDENCY_ERROR),
            (ImportError("fitz"), cli.EXIT_DEPENDENCY_ERROR),
            (PageRangeError("bad"), cli.EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x.pdf"), cli.EXIT_FILE_ERROR),
            (MalformedFileError("broken"), cli.EXIT_FILE_ERROR),
            (FormatError(format_type="rtf"), cli.EXIT_FORMAT_ERROR),
            (ParsingError("failed"), cli.EXIT_PARSING_ERROR),
            (OutputWriteError("out.pdf"), cli.EXIT_RENDERING_ERROR),
            (DocReflowError("generic"), cli.EXIT_ERROR),
            (RuntimeError("other"), cli.EXIT_ERROR),
        ],
    )
    def test_mapping(self, error, code):
        assert cli.get_exit_code_for_exception(error) == code

    def test_import_error_from_command(self, resume_txt, monkeypatch, capsys):
        def missing_library(args, config):
            raise ImportError("No module named 'fitz'")

        monkeypatch.setattr("docreflow.cli.run_extract", missing_library)
        assert cli.main(["extract", str(resume_txt)]) == cli.EXIT_DEPENDENCY_ERROR
        assert "fitz" in capsys.readouterr().err


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    def test_priority_cli_over_env_over_config(self, monkeypatch):
        parser = cli.create_parser()
        config = {"gap_threshold": 3, "password": "from-config", "pages": "1"}
        monkeypatch.setenv("DOCREFLOW_GAP_THRESHOLD", "4")
        monkeypatch.setenv("DOCREFLOW_PASSWORD", "from-env")
        args = parser.parse_args(["extract", "in.pdf", "--gap-threshold", "5"])

        options = cli.build_options(ExtractionOptions, args, config)

        assert options.gap_threshold == 5.0
        assert options.password == "from-env"
        assert options.pages == "1"

    def test_defaults_when_nothing_given(self):
        args = cli.create_parser().parse_args(["render", "in.txt"])
        assert cli.build_options(LayoutOptions, args, {}) == LayoutOptions()

    def test_boolean_flag_and_env(self, monkeypatch):
        parser = cli.create_parser()
        args = parser.parse_args(["extract", "in.txt", "--no-chardet"])
        assert cli.build_options(ExtractionOptions, args, {}).use_chardet is False

        monkeypatch.setenv("DOCREFLOW_USE_CHARDET", "no")
        args = parser.parse_args(["extract", "in.txt"])
        assert cli.build_options(ExtractionOptions, args, {}).use_chardet is False

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("DOCREFLOW_MARGIN", "wide")
        args = cli.create_parser().parse_args(["render", "in.txt"])
        with pytest.raises(Exception, match="DOCREFLOW_MARGIN"):
            cli.build_options(LayoutOptions, args, {})

    def test_invalid_value_is_validation_error(self):
        args = cli.create_parser().parse_args(["render", "in.txt", "--margin", "-3"])
        with pytest.raises(DocReflowError) as exc_info:
            cli.build_options(LayoutOptions, args, {})
        assert cli.get_exit_code_for_exception(exc_info.value) == cli.EXIT_VALIDATION_ERROR

    def test_unknown_config_key_warns(self, caplog):
        args = cli.create_parser().parse_args(["render", "in.txt"])
        with caplog.at_level(logging.WARNING, logger="docreflow.cli"):
            options = cli.build_options(LayoutOptions, args, {"page-size": "legal", "colour": "red"})
        assert options.page_size == "legal"
        assert "colour" in caplog.text


@pytest.mark.unit
@pytest.mark.cli
class TestExtractCommand:
    def test_prints_text(self, resume_txt, capsys):
        assert cli.main(["extract", str(resume_txt)]) == cli.EXIT_SUCCESS
        assert capsys.readouterr().out == "### Summary\nBuilds things.\n- Python\n"

    def test_writes_output_file(self, resume_txt, tmp_path):
        out = tmp_path / "out.txt"
        assert cli.main(["extract", str(resume_txt), "-o", str(out)]) == cli.EXIT_SUCCESS
        assert out.read_text(encoding="utf-8").startswith("### Summary")

    def test_missing_source(self, tmp_path, capsys):
        assert cli.main(["extract", str(tmp_path / "missing.txt")]) == cli.EXIT_FILE_ERROR
        assert "No such source file" in capsys.readouterr().err

    def test_bad_config_file(self, resume_txt, tmp_path, capsys):
        code = cli.main(["--config", str(tmp_path / "none.toml"), "extract", str(resume_txt)])
        assert code == cli.EXIT_VALIDATION_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_config_from_env_var(self, resume_txt, tmp_path, monkeypatch):
        config = tmp_path / "cfg.json"
        config.write_text(json.dumps({"extract": {"gap_threshold": -1}}), encoding="utf-8")
        monkeypatch.setenv("DOCREFLOW_CONFIG", str(config))
        assert cli.main(["extract", str(resume_txt)]) == cli.EXIT_VALIDATION_ERROR

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])
        assert exc_info.value.code == 0
        assert "docreflow" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestRenderCommand:
    def test_instructions_as_json_lines(self, resume_txt, capsys, monkeypatch):
        monkeypatch.setattr("docreflow.cli.layout_text", _fake_layout)
        assert cli.main(["render", str(resume_txt), "--instructions"]) == cli.EXIT_SUCCESS

        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert records[0] == {"op": "PlaceText", "lines": ["Summary"], "x": 20.0, "y": 24.0, "font": "header"}
        assert {"op": "PageBreak"} in records
        assert records[-1]["op"] == "PlaceBulletGlyph"

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", _StdIn("- from stdin\n"))
        captured = {}

        def fake_layout(text, options):
            captured["text"] = text
            captured["options"] = options
            return []

        monkeypatch.setattr("docreflow.cli.layout_text", fake_layout)
        assert cli.main(["render", "-", "--instructions", "--page-size", "letter"]) == cli.EXIT_SUCCESS
        assert captured["text"] == "- from stdin\n"
        assert captured["options"].page_size == "letter"

    def test_writes_pdf(self, resume_txt, tmp_path, capsys):
        pytest.importorskip("reportlab")
        out = tmp_path / "cv.pdf"
        assert cli.main(["render", str(resume_txt), "-o", str(out)]) == cli.EXIT_SUCCESS
        assert out.read_bytes().startswith(b"%PDF")
        assert "Wrote 1 page(s)" in capsys.readouterr().err

    def test_invalid_page_size_rejected_by_argparse(self, resume_txt):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["render", str(resume_txt), "--page-size", "a3"])
        assert exc_info.value.code == 2


class _StdIn:
    def __init__(self, text):
        self._text = text

    def read(self):
        return self._text


def _fake_layout(text, options):
    from docreflow.layout import FontRole, PageBreak, PlaceBulletGlyph, PlaceText

    return [
        PlaceText(("Summary",), options.margin, options.margin + 4, FontRole.HEADER),
        PageBreak(),
        PlaceBulletGlyph(options.margin, options.margin),
    ]
