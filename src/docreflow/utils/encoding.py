#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/utils/encoding.py
"""Decode plain-text sources whose encoding is unknown."""

from __future__ import annotations

import logging
from typing import IO, Sequence

from docreflow.constants import DEFAULT_FALLBACK_ENCODINGS

logger = logging.getLogger(__name__)

# chardet is only trusted above this confidence
_MIN_CONFIDENCE = 0.7
_SAMPLE_BYTES = 8192


def detect_encoding(data: bytes) -> str | None:
    """Ask chardet for the encoding of the first few KiB of ``data``.

    None means chardet is not installed, found nothing, or was unsure.
    """
    try:
        import chardet
    except ImportError:
        logger.debug("chardet is not installed; skipping encoding detection")
        return None

    guess = chardet.detect(data[:_SAMPLE_BYTES]) or {}
    encoding, confidence = guess.get("encoding"), guess.get("confidence") or 0.0
    logger.debug(f"chardet guess: {encoding} ({confidence:.2f})")
    return encoding if encoding and confidence >= _MIN_CONFIDENCE else None


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: Sequence[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode ``data`` with the first encoding that accepts it.

    The chardet guess (when enabled) is tried before ``fallback_encodings``.
    The default fallbacks end with latin-1, which accepts any bytes; with a
    narrower list the last resort is UTF-8 with replacement characters.
    """
    candidates = [detect_encoding(data)] if use_chardet else []
    candidates += list(DEFAULT_FALLBACK_ENCODINGS if fallback_encodings is None else fallback_encodings)

    for encoding in filter(None, candidates):
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"{encoding} could not decode the source")

    logger.warning("All encoding attempts failed, decoding as UTF-8 with replacement characters")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_bytes(stream: IO[bytes] | IO[str], encoding: str = "utf-8") -> bytes:
    """Read the rest of ``stream``; text streams are encoded with ``encoding``.

    Raises
    ------
    TypeError
        If ``read()`` returns neither bytes nor str

    """
    content = stream.read()
    if isinstance(content, str):
        return content.encode(encoding)
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    raise TypeError(f"read() returned {type(content).__name__}; expected bytes or str")
