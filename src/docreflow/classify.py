#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/classify.py
"""Classify lines of lightly marked-up text by structural role.

Each line is tested against an ordered list of rules and the first rule
that matches decides its kind. The markup is a small markdown subset:

- ``### Title`` is a header
- ``**Title**`` on its own short line is also a header
- ``-``, ``*`` or ``•`` starts a bullet
- an empty line is a blank separator
- anything else is paragraph text

Inline ``**`` emphasis is never honored; the markers are stripped from
every content string.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from docreflow.constants import BULLET_MARKERS, EMPHASIS_HEADER_MAX_LENGTH, EMPHASIS_MARKER, HEADER_MARKER

logger = logging.getLogger(__name__)

_LINE_ENDINGS = re.compile(r"\r\n?")
_HEADER_RUNS = re.compile(re.escape(HEADER_MARKER))
_EMPHASIS_RUNS = re.compile(re.escape(EMPHASIS_MARKER))
_BULLET_PREFIX = re.compile("^[" + re.escape("".join(BULLET_MARKERS)) + r"]\s*")


class LineKind(Enum):
    """Structural role of a line."""

    BLANK = "blank"
    HEADER = "header"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class DocumentLine:
    """A classified line with its markup prefixes removed."""

    kind: LineKind
    content: str


@dataclass(frozen=True)
class ClassificationRule:
    """One entry of the ordered rule list.

    ``matches`` and ``extract`` both receive the trimmed line.
    """

    name: str
    kind: LineKind
    matches: Callable[[str], bool]
    extract: Callable[[str], str]


def strip_emphasis(text: str) -> str:
    """Remove every ``**`` run from ``text``."""
    return _EMPHASIS_RUNS.sub("", text)


def _header_content(line: str) -> str:
    return strip_emphasis(_HEADER_RUNS.sub("", line)).strip()


def _bullet_content(line: str) -> str:
    return strip_emphasis(_BULLET_PREFIX.sub("", line, count=1).strip())


def _is_emphasis_header(line: str) -> bool:
    return (
        line.startswith(EMPHASIS_MARKER)
        and line.endswith(EMPHASIS_MARKER)
        and len(line) < EMPHASIS_HEADER_MAX_LENGTH
    )


# Order matters: "**Education**" must become a header before the bullet
# rule sees its leading "*".
DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("blank", LineKind.BLANK, lambda line: not line, lambda line: ""),
    ClassificationRule("header", LineKind.HEADER, lambda line: line.startswith(HEADER_MARKER), _header_content),
    ClassificationRule("emphasis_header", LineKind.HEADER, _is_emphasis_header, _header_content),
    ClassificationRule("bullet", LineKind.BULLET, lambda line: line.startswith(BULLET_MARKERS), _bullet_content),
    ClassificationRule("paragraph", LineKind.PARAGRAPH, lambda line: True, strip_emphasis),
)


def match_rule(raw_line: str, rules: tuple[ClassificationRule, ...] = DEFAULT_RULES) -> ClassificationRule:
    """Return the first rule matching ``raw_line``.

    The default rule list ends with a catch-all, so a rule is always found
    for it. A custom list without one raises ``LookupError`` on no match.
    """
    line = raw_line.strip()
    for rule in rules:
        if rule.matches(line):
            return rule
    raise LookupError(f"No classification rule matched line: {raw_line!r}")


def classify(raw_line: str, rules: tuple[ClassificationRule, ...] = DEFAULT_RULES) -> DocumentLine:
    """Classify a single line.

    Examples
    --------
    >>> classify("### Summary")
    DocumentLine(kind=<LineKind.HEADER: 'header'>, content='Summary')
    >>> classify("- Led a team of 5")
    DocumentLine(kind=<LineKind.BULLET: 'bullet'>, content='Led a team of 5')
    >>> classify("**Education**")
    DocumentLine(kind=<LineKind.HEADER: 'header'>, content='Education')

    """
    rule = match_rule(raw_line, rules)
    return DocumentLine(kind=rule.kind, content=rule.extract(raw_line.strip()))


def split_lines(text: str) -> list[str]:
    """Normalize ``\\r\\n`` and ``\\r`` line endings and split on ``\\n``."""
    return _LINE_ENDINGS.sub("\n", text).split("\n")


def classify_text(text: str, rules: tuple[ClassificationRule, ...] = DEFAULT_RULES) -> list[DocumentLine]:
    """Classify every line of ``text`` in order."""
    lines = [classify(raw_line, rules) for raw_line in split_lines(text)]
    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(line.kind.value for line in lines)
        logger.debug(f"Classified {len(lines)} lines: {dict(counts)}")
    return lines
