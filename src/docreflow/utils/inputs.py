#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/utils/inputs.py
"""Source inputs and page selections shared by the decoders.

A source is a filesystem path, raw bytes, or a readable binary stream.
Page selections are 1-based, either a list (``[1, 3]``) or a range string
(``"1-3,5,8-"``), and are turned into 0-based indices here.
"""

from __future__ import annotations

import re
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Union

from docreflow.exceptions import FileNotFoundError as SourceNotFoundError
from docreflow.exceptions import PageRangeError, ValidationError

PathLike = Union[str, Path]
SourceInput = Union[PathLike, IO[bytes], bytes]

_RANGE_PART = re.compile(r"^(?P<start>\d*)\s*(?P<dash>-)?\s*(?P<end>\d*)$")


def is_path_like(obj: Any) -> bool:
    return isinstance(obj, (str, Path))


def is_file_like(obj: Any) -> bool:
    return callable(getattr(obj, "read", None))


def validate_and_convert_input(input_data: SourceInput) -> tuple[Any, str]:
    """Classify a source and normalize it for the decoding libraries.

    Returns
    -------
    tuple[Any, str]
        The input and its kind: ``"path"`` (unchanged), ``"bytes"``
        (wrapped in a BytesIO) or ``"file"`` (unchanged).

    Raises
    ------
    FileNotFoundError
        If a path does not exist
    ValidationError
        If a path is a directory, or the input is none of the accepted kinds

    """
    if is_path_like(input_data):
        path = Path(input_data)
        if not path.exists():
            raise SourceNotFoundError(file_path=str(input_data))
        if not path.is_file():
            raise ValidationError(
                f"Expected a file but got a directory or device: {input_data}",
                parameter_name="input_data",
                parameter_value=input_data,
            )
        return input_data, "path"

    if isinstance(input_data, (bytes, bytearray)):
        return BytesIO(bytes(input_data)), "bytes"

    if is_file_like(input_data):
        return input_data, "file"

    raise ValidationError(
        f"Cannot read a source of type {type(input_data).__name__}; pass a path, bytes or a binary stream",
        parameter_name="input_data",
        parameter_value=input_data,
    )


def source_name(input_data: Any) -> str | None:
    """File path of a path-like source, None for in-memory sources."""
    return str(input_data) if is_path_like(input_data) else None


def parse_page_ranges(page_spec: str, total_pages: int) -> list[int]:
    """Turn a range string into sorted, de-duplicated 0-based page indices.

    Open ends run to the first or last page, reversed ranges are accepted,
    and pages past the end of the document are dropped.

    Raises
    ------
    ValueError
        If a comma-separated part is not a number or a range

    Examples
    --------
    >>> parse_page_ranges("1-3,5", 10)
    [0, 1, 2, 4]
    >>> parse_page_ranges("8-", 10)
    [7, 8, 9]
    >>> parse_page_ranges("5-3", 10)
    [2, 3, 4]

    """
    selected: set[int] = set()

    for part in filter(None, (piece.strip() for piece in page_spec.split(","))):
        match = _RANGE_PART.match(part)
        if match is None or not (match["start"] or match["end"]):
            raise ValueError(f"not a page or page range: {part!r}")

        if match["dash"]:
            first = int(match["start"]) if match["start"] else 1
            last = int(match["end"]) if match["end"] else total_pages
            first, last = sorted((first, last))
        elif match["end"]:
            # "1 2" has no dash and two numbers
            raise ValueError(f"not a page or page range: {part!r}")
        else:
            first = last = int(match["start"])

        selected.update(page - 1 for page in range(first, last + 1) if 1 <= page <= total_pages)

    return sorted(selected)


def validate_page_range(pages: list[int] | str | None, max_pages: int | None = None) -> list[int] | None:
    """Check a 1-based page selection and return 0-based indices.

    None (every page) is returned unchanged.

    Raises
    ------
    PageRangeError
        If the selection is malformed or names a page the document lacks

    Examples
    --------
    >>> validate_page_range([1, 2, 3], max_pages=5)
    [0, 1, 2]
    >>> validate_page_range("1-3,5", max_pages=10)
    [0, 1, 2, 4]

    """
    if pages is None:
        return None

    if isinstance(pages, str):
        if max_pages is None:
            raise PageRangeError("A page range string needs the document page count", parameter_value=pages)
        try:
            return parse_page_ranges(pages, max_pages)
        except ValueError as e:
            raise PageRangeError(f"Bad page range {pages!r}: {e}", parameter_value=pages, original_error=e) from e

    if not isinstance(pages, list):
        raise PageRangeError(
            f"Pages must be a list of page numbers or a range string, not {type(pages).__name__}",
            parameter_value=pages,
        )

    for page in pages:
        if isinstance(page, bool) or not isinstance(page, int):
            raise PageRangeError(f"Page {page!r} is not a whole number", parameter_value=pages)
        if page < 1 or (max_pages is not None and page > max_pages):
            upper = max_pages if max_pages is not None else "..."
            raise PageRangeError(f"Page {page} is outside 1-{upper}", parameter_value=pages)

    return [page - 1 for page in pages]
