"""PDF formatter: adapts ``ReportComposer`` to the ``IOutputFormatter`` protocol."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Optional

from historial_report.composer import ComposedReport, ReportComposer
from historial_report.core.config import LayoutConfig
from historial_report.models import MedicalRecordAggregate


class PDFFormatter:
    """Renders a ``MedicalRecordAggregate`` as the historial PDF."""

    def __init__(self, config: LayoutConfig | None = None, logo: Optional[bytes] = None) -> None:
        self._composer = ReportComposer(config, logo=logo)

    # ── Public API ───────────────────────────────────────────────────

    def compose(self, record: MedicalRecordAggregate, generated_on: Optional[date] = None) -> ComposedReport:
        """Compose and keep the layout metadata alongside the bytes."""
        return self._composer.compose(record, generated_on=generated_on)

    def format(self, record: MedicalRecordAggregate, **kwargs: Any) -> bytes:
        """Render *record* to PDF bytes.

        Accepts ``generated_on`` to pin the generation date printed under the
        title.
        """
        return self.compose(record, generated_on=kwargs.get("generated_on")).pdf

    def format_to_file(self, record: MedicalRecordAggregate, path: Path, **kwargs: Any) -> Path:
        """Write PDF to *path* and return it."""
        path.write_bytes(self.format(record, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"

    @property
    def config(self) -> LayoutConfig:
        return self._composer.config
