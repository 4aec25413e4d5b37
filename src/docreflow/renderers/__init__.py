#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Drawing backends for paginated output."""

from docreflow.renderers.pdf import PdfRenderer, PdfSurface, ReportLabMeasurer

__all__ = ["PdfRenderer", "PdfSurface", "ReportLabMeasurer"]
