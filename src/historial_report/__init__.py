"""historial-report: paginated PDF reports for medical records (historiales).

Core API::

    from historial_report import (
        ReportComposer, ComposedReport, LayoutConfig,
        MedicalRecordAggregate, Patient, Professional,
        Diagnosis, Treatment, Exam,
        load_aggregate,
    )

    report = ReportComposer().compose(record)
    report.pdf          # bytes
    report.page_count
    report.sections     # where every section landed

Delivery::

    from historial_report import PDFFormatter
"""

from __future__ import annotations

from typing import Any

from historial_report.composer import ComposedReport, ReportComposer
from historial_report.core.config import AppSettings, LayoutConfig
from historial_report.exceptions import (
    CanvasDrawError,
    HistorialReportError,
    MissingAggregateError,
    RenderOverflowImpossible,
    SchemaError,
)
from historial_report.models import (
    Diagnosis,
    Exam,
    MedicalRecordAggregate,
    Patient,
    Professional,
    Treatment,
)
from historial_report.schemas import HistorialPayload, load_aggregate

__all__ = [
    "AppSettings",
    "CanvasDrawError",
    "ComposedReport",
    "Diagnosis",
    "Exam",
    "HistorialPayload",
    "HistorialReportError",
    "LayoutConfig",
    "MedicalRecordAggregate",
    "MissingAggregateError",
    "PDFFormatter",
    "Patient",
    "Professional",
    "RenderOverflowImpossible",
    "ReportComposer",
    "SchemaError",
    "Treatment",
    "load_aggregate",
]


def __getattr__(name: str) -> Any:
    """Lazy-load PDFFormatter with the rest of the delivery layer."""
    if name == "PDFFormatter":
        from historial_report.formatters.pdf_formatter import PDFFormatter

        return PDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
