"""Page surface and flow tracking for the report composer."""

from __future__ import annotations

from historial_report.layout.canvas import (
    Align,
    PageCanvas,
    TableMode,
    TablePlacement,
    TextRun,
    TextStyle,
)
from historial_report.layout.cursor import FlowCursor, RenderState, SectionPlacement

__all__ = [
    "Align",
    "FlowCursor",
    "PageCanvas",
    "RenderState",
    "SectionPlacement",
    "TableMode",
    "TablePlacement",
    "TextRun",
    "TextStyle",
]
