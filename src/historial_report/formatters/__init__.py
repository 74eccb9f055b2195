"""Output formatters for rendering a medical record.

Usage::

    from historial_report.formatters import PDFFormatter

    pdf = PDFFormatter()
    pdf_bytes = pdf.format(record)
"""

from __future__ import annotations

from typing import Any

from historial_report.formatters.protocols import IOutputFormatter

__all__ = [
    "IOutputFormatter",
    "PDFFormatter",
]


def __getattr__(name: str) -> Any:
    """Lazy-load PDFFormatter so reportlab is only imported when needed."""
    if name == "PDFFormatter":
        from historial_report.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
