#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docreflow/parsers/base.py
"""Base class for source decoders.

A decoder turns one source document (path, bytes or binary stream) into
the raw text that feeds the rest of docreflow. PDF decoding goes through
fragment reconstruction; other formats already carry line structure.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from docreflow.exceptions import InvalidOptionsError
from docreflow.options.extraction import ExtractionOptions
from docreflow.utils.inputs import SourceInput

logger = logging.getLogger(__name__)


class BaseDecoder(ABC):
    """Abstract base class for all source decoders.

    Parameters
    ----------
    options : ExtractionOptions or None, default None
        Extraction options. Defaults are used when None.

    """

    format_name: str = ""

    def __init__(self, options: ExtractionOptions | None = None):
        """Initialize the decoder with validated options."""
        if options is not None and not isinstance(options, ExtractionOptions):
            raise InvalidOptionsError(
                component_name=f"{self.format_name or type(self).__name__} decoder",
                expected_type=ExtractionOptions,
                received_type=type(options),
            )
        self.options: ExtractionOptions = options or ExtractionOptions()

    @abstractmethod
    def extract_text(self, input_data: SourceInput) -> str:
        """Decode ``input_data`` and return its text.

        Raises
        ------
        MalformedFileError
            If the document cannot be opened or decoded
        DependencyError
            If the decoding library is not installed
        ValidationError
            If the input is not a supported kind

        """
        raise NotImplementedError
