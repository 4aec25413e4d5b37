#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration dataclasses for docreflow."""

from docreflow.options.base import BaseOptions, CloneFrozenMixin
from docreflow.options.extraction import ExtractionOptions
from docreflow.options.layout import LayoutOptions, PageGeometry

__all__ = [
    "BaseOptions",
    "CloneFrozenMixin",
    "ExtractionOptions",
    "LayoutOptions",
    "PageGeometry",
]
