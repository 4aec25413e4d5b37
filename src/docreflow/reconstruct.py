#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/reconstruct.py
"""Rebuild line-structured text from positioned text fragments.

A page decoder emits fragments (glyph runs) in its own stream order, each
with a vertical position that decreases going down the page. Consecutive
fragments whose positions differ by no more than ``gap_threshold`` are
joined on one line with a single space; a larger jump starts a new line.
Every page ends with a paragraph separator.

The heuristic only compares each fragment with the previous one. It is
not reading-order aware, so true multi-column layouts come out
interleaved.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from docreflow.constants import DEFAULT_GAP_THRESHOLD, LINE_BREAK, PARAGRAPH_SEPARATOR
from docreflow.exceptions import InvalidOptionsError
from docreflow.options.extraction import ExtractionOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fragment:
    """A positioned run of text emitted by a page decoder.

    Parameters
    ----------
    text : str
        Text of the run. May be empty or whitespace only.
    y : float, default 0.0
        Vertical position in source units. 0 when the decoder has no
        transform for the run.

    """

    text: str
    y: float = 0.0


def reconstruct_page(fragments: Iterable[Fragment], gap_threshold: float = DEFAULT_GAP_THRESHOLD) -> str:
    """Join one page's fragments into lines of text.

    Parameters
    ----------
    fragments : iterable of Fragment
        Fragments in decoder order
    gap_threshold : float, default 6.0
        Vertical distance above which a fragment starts a new line

    Returns
    -------
    str
        Page text terminated by ``"\\n\\n"``. A page with no visible
        fragments yields just the separator.

    Examples
    --------
    >>> reconstruct_page([Fragment("John Doe", 700), Fragment("Software Engineer", 694),
    ...                   Fragment("### Experience", 650)])
    'John Doe Software Engineer\\n### Experience\\n\\n'

    """
    parts: list[str] = []
    last_y: float | None = None

    for fragment in fragments:
        text = fragment.text
        if not text or not text.strip():
            continue

        y = fragment.y
        if last_y is not None and abs(y - last_y) > gap_threshold:
            parts.append(LINE_BREAK)
        elif parts and not parts[-1][-1].isspace():
            parts.append(" ")
        parts.append(text)
        last_y = y

    parts.append(PARAGRAPH_SEPARATOR)
    return "".join(parts)


def reconstruct_document(
    pages: Iterable[Iterable[Fragment]], gap_threshold: float = DEFAULT_GAP_THRESHOLD
) -> str:
    """Reconstruct every page in order and concatenate the results.

    No state carries over between pages, so ``n`` pages always produce at
    least ``n`` paragraph separators.
    """
    return "".join(reconstruct_page(page, gap_threshold) for page in pages)


class FragmentReconstructor:
    """Reconstruct pages with a configured gap threshold.

    Parameters
    ----------
    options : ExtractionOptions or None, default None
        Extraction options; only ``gap_threshold`` is used here.

    """

    def __init__(self, options: ExtractionOptions | None = None):
        if options is not None and not isinstance(options, ExtractionOptions):
            raise InvalidOptionsError("reconstructor", ExtractionOptions, type(options))
        self.options = options or ExtractionOptions()

    @property
    def gap_threshold(self) -> float:
        return self.options.gap_threshold

    def reconstruct_page(self, fragments: Iterable[Fragment]) -> str:
        """Reconstruct a single page."""
        return reconstruct_page(fragments, self.gap_threshold)

    def reconstruct_document(self, pages: Iterable[Iterable[Fragment]]) -> str:
        """Reconstruct every page, logging line counts at DEBUG level."""
        chunks = []
        for page_num, fragments in enumerate(pages, start=1):
            page_text = self.reconstruct_page(fragments)
            if logger.isEnabledFor(logging.DEBUG):
                line_count = len(page_text.rstrip(LINE_BREAK).splitlines())
                logger.debug(f"Page {page_num}: reconstructed {line_count} lines")
            chunks.append(page_text)
        return "".join(chunks)
