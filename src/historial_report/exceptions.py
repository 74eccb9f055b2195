"""Exception hierarchy for historial-report."""

from __future__ import annotations

from typing import Optional


class HistorialReportError(Exception):
    """Base exception for all historial-report errors."""


class MissingAggregateError(HistorialReportError):
    """Raised before any page is created when no medical record was supplied."""

    def __init__(self, message: str = "A medical record aggregate is required to compose a report.") -> None:
        super().__init__(message)


class RenderOverflowImpossible(HistorialReportError):
    """A single atomic block is taller than a whole fresh page.

    Clinical data is never truncated, so the composition is aborted and the
    offending section is reported to the caller.
    """

    def __init__(self, section: Optional[str], needed: float, available: float) -> None:
        self.section = section or "unknown"
        self.needed = needed
        self.available = available
        super().__init__(
            f"Section '{self.section}' needs {needed:.1f} mm for a single row "
            f"but a fresh page only offers {available:.1f} mm."
        )


class CanvasDrawError(HistorialReportError):
    """Raised when the drawing surface cannot place a visual element."""


class SchemaError(HistorialReportError):
    """Raised when an incoming historial payload cannot be converted."""
