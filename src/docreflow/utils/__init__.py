#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared helpers for docreflow decoders and renderers."""
