#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for docreflow.

Two subcommands mirror the two halves of the library:

``extract``
    Read a PDF, DOCX or text file and print (or save) its text. PDF pages
    are rebuilt from positioned fragments.

``render``
    Read marked-up text (or any supported source) and write a paginated PDF.

Option values are resolved in this order, highest first: command-line
flags, ``DOCREFLOW_<OPTION>`` environment variables, the ``extract`` or
``render`` section of a configuration file, built-in defaults.

Examples
--------
Extract text from a PDF::

    $ docreflow extract resume.pdf -o resume.txt

Use a looser line-grouping threshold::

    $ docreflow extract resume.pdf --gap-threshold 8

Render text to a Letter-sized PDF::

    $ docreflow render optimized.txt -o Optimized_CV.pdf --page-size letter

Inspect the layout without writing a PDF::

    $ docreflow render optimized.txt --instructions

"""

import argparse
import dataclasses
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from docreflow import __version__
from docreflow.api import extract_text, layout_text
from docreflow.config import CONFIG_ENV_VAR, get_section, load_config_with_priority
from docreflow.constants import DEFAULT_OUTPUT_FILENAME
from docreflow.exceptions import (
    DependencyError,
    DocReflowError,
    FileError,
    FormatError,
    ParsingError,
    PasswordProtectedError,
    RenderingError,
    ValidationError,
)
from docreflow.layout import PageBreak, count_pages
from docreflow.logging_utils import configure_logging
from docreflow.options.base import BaseOptions
from docreflow.options.extraction import ExtractionOptions
from docreflow.options.layout import LayoutOptions

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOCREFLOW_"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
EXIT_PASSWORD_ERROR = 9

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# Checked in order; subclasses come before their bases
_EXIT_CODES: tuple[tuple[tuple[type[BaseException], ...], int], ...] = (
    ((PasswordProtectedError,), EXIT_PASSWORD_ERROR),
    ((DependencyError, ImportError), EXIT_DEPENDENCY_ERROR),
    ((ValidationError,), EXIT_VALIDATION_ERROR),
    ((FileError,), EXIT_FILE_ERROR),
    ((FormatError,), EXIT_FORMAT_ERROR),
    ((ParsingError,), EXIT_PARSING_ERROR),
    ((RenderingError,), EXIT_RENDERING_ERROR),
)


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    return next((code for types, code in _EXIT_CODES if isinstance(exception, types)), EXIT_ERROR)


def _is_bool_field(field: dataclasses.Field) -> bool:
    return field.type in (bool, "bool")


def _add_option_arguments(parser: argparse.ArgumentParser, options_cls: type[BaseOptions], title: str) -> None:
    """Add one flag per documented dataclass field of ``options_cls``.

    Flags default to ``argparse.SUPPRESS`` so only values given on the
    command line appear in the namespace.
    """
    group = parser.add_argument_group(title)
    for field in dataclasses.fields(options_cls):
        help_text = field.metadata.get("help")
        if not help_text:
            continue

        if _is_bool_field(field):
            # Boolean fields default to True; the flag turns them off
            group.add_argument(
                f"--no-{field.name.replace('_', '-').removeprefix('use-')}",
                dest=field.name,
                action="store_false",
                default=argparse.SUPPRESS,
                help=f"Disable: {help_text}",
            )
            continue

        group.add_argument(
            f"--{field.name.replace('_', '-')}",
            dest=field.name,
            type=field.metadata.get("type", str),
            choices=field.metadata.get("choices"),
            default=argparse.SUPPRESS,
            help=help_text,
        )


def _env_value(field: dataclasses.Field, raw: str) -> Any:
    if _is_bool_field(field):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise argparse.ArgumentTypeError(f"Environment variable {ENV_PREFIX}{field.name.upper()}: {raw!r} is not a boolean")
    converter = field.metadata.get("type", str)
    try:
        return converter(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Environment variable {ENV_PREFIX}{field.name.upper()}: {raw!r} is not a valid {converter.__name__}"
        ) from e


def build_options(
    options_cls: type[BaseOptions],
    args: argparse.Namespace,
    config_section: dict[str, Any],
) -> Any:
    """Resolve an options dataclass from config, environment and flags.

    Raises
    ------
    ValidationError
        If a resolved value fails the dataclass validation

    """
    known = {field.name: field for field in dataclasses.fields(options_cls)}
    for key in config_section:
        if key.replace("-", "_") not in known:
            logger.warning(f"Ignoring unknown configuration key: {key}")

    overrides: dict[str, Any] = {}
    for name, field in known.items():
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            overrides[name] = _env_value(field, raw)
        if hasattr(args, name):
            overrides[name] = getattr(args, name)

    try:
        return options_cls.from_mapping(config_section).create_updated(**overrides)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {options_cls.__name__}: {e}", original_error=e) from e


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the extract and render subcommands."""
    parser = argparse.ArgumentParser(
        prog="docreflow",
        description="Rebuild text from PDF layouts and paginate marked-up text into PDF.",
    )
    parser.add_argument("--version", action="version", version=f"docreflow {__version__}")
    parser.add_argument("--config", help=f"Configuration file (default: discovered, or ${CONFIG_ENV_VAR})")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Timestamped log output with logger names")

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Extract text from a PDF, DOCX or text file")
    extract.add_argument("input", help="Source document")
    extract.add_argument("-o", "--out", help="Write text to this file instead of stdout")
    extract.add_argument(
        "--format", dest="source_format", default="auto", choices=["auto", "pdf", "docx", "txt"],
        help="Source format (default: detect)",
    )
    _add_option_arguments(extract, ExtractionOptions, "extraction options")

    render = subparsers.add_parser("render", help="Render marked-up text to a paginated PDF")
    render.add_argument("input", help="Text file (or any supported source document); '-' reads stdin")
    render.add_argument("-o", "--out", default=DEFAULT_OUTPUT_FILENAME, help="Output PDF path")
    render.add_argument(
        "--format", dest="source_format", default="auto", choices=["auto", "pdf", "docx", "txt"],
        help="Input format (default: detect)",
    )
    render.add_argument(
        "--instructions", action="store_true", help="Print draw instructions as JSON lines instead of writing a PDF"
    )
    _add_option_arguments(render, LayoutOptions, "layout options")

    return parser


def _read_render_input(args: argparse.Namespace, config: dict[str, Any]) -> str:
    if args.input == "-":
        return sys.stdin.read()
    extraction_options = build_options(ExtractionOptions, argparse.Namespace(), get_section(config, "extract"))
    return extract_text(args.input, args.source_format, extraction_options)


def run_extract(args: argparse.Namespace, config: dict[str, Any]) -> int:
    options = build_options(ExtractionOptions, args, get_section(config, "extract"))
    text = extract_text(args.input, args.source_format, options)

    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {len(text)} characters to {args.out}")
    else:
        sys.stdout.write(text)
    return EXIT_SUCCESS


def run_render(args: argparse.Namespace, config: dict[str, Any]) -> int:
    options = build_options(LayoutOptions, args, get_section(config, "render"))
    text = _read_render_input(args, config)

    if args.instructions:
        instructions = layout_text(text, options)
        for instruction in instructions:
            record = {"op": type(instruction).__name__}
            if not isinstance(instruction, PageBreak):
                record.update(
                    {
                        key: value.value if hasattr(value, "value") else value
                        for key, value in dataclasses.asdict(instruction).items()
                    }
                )
            sys.stdout.write(json.dumps(record, ensure_ascii=False) + "\n")
        logger.info(f"{len(instructions)} instructions over {count_pages(instructions)} page(s)")
        return EXIT_SUCCESS

    from docreflow.renderers.pdf import PdfRenderer

    page_count = PdfRenderer(options).render(text, args.out)
    print(f"Wrote {page_count} page(s) to {args.out}", file=sys.stderr)
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the docreflow CLI and return the exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)

    try:
        config = load_config_with_priority(args.config, os.environ.get(CONFIG_ENV_VAR))
        if args.command == "extract":
            return run_extract(args, config)
        return run_render(args, config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except (DocReflowError, ImportError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR


if __name__ == "__main__":
    sys.exit(main())
