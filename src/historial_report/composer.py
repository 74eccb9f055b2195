"""Report composer: lays a medical record aggregate out onto PDF pages.

Section order is fixed: title, patient information, vital signs,
diagnoses, treatments, exams, narrative, footer.  Absent child collections
and a blank narrative are skipped without disturbing the flow.

Page breaks between sections:

* diagnoses always start on a fresh page;
* treatments and exams break only when the cursor is already past
  ``LayoutConfig.soft_break_threshold``, otherwise they continue one
  ``section_gap`` below the previous section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from historial_report.core.config import LayoutConfig
from historial_report.core.startup_checks import validate_layout
from historial_report.exceptions import MissingAggregateError
from historial_report.layout.canvas import PageCanvas, TextRun
from historial_report.layout.cursor import RenderState, SectionPlacement
from historial_report.models import MedicalRecordAggregate
from historial_report.rendering.rows import (
    DIAGNOSIS_TABLE,
    EXAM_TABLE,
    PATIENT_FIELDS,
    TREATMENT_TABLE,
    VITAL_SIGN_FIELDS,
    diagnosis_rows,
    exam_rows,
    label_value_rows,
    record_summary,
    treatment_rows,
)
from historial_report.rendering.sections import (
    FooterBlock,
    FreeTextBlock,
    LabelValueBlock,
    TabularBlock,
    TitleBlock,
)
from historial_report.rendering.styles import DOCUMENT_TITLE, SECTION_TITLES

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposedReport:
    """Finished document handed back to the caller.

    ``pdf`` is the artifact to store or stream; the remaining fields describe
    how it was laid out.
    """

    pdf: bytes
    page_count: int
    sections: tuple[SectionPlacement, ...]
    text_runs: tuple[TextRun, ...]

    def sections_in_order(self) -> list[str]:
        return [s.key for s in self.sections]

    def section(self, key: str) -> Optional[SectionPlacement]:
        return next((s for s in self.sections if s.key == key), None)

    def text_on_page(self, page_index: int) -> list[str]:
        return [r.text for r in self.text_runs if r.page_index == page_index]

    def contains_text(self, needle: str) -> bool:
        return any(needle in r.text for r in self.text_runs)


class ReportComposer:
    """Composes one PDF per call; holds only immutable configuration.

    Every ``compose()`` builds its own ``PageCanvas`` and ``RenderState``, so
    one composer may serve concurrent requests.
    """

    def __init__(self, config: LayoutConfig | None = None, logo: Optional[bytes] = None) -> None:
        """Raises ``ValueError`` when *config* cannot lay out a report."""
        self._config = config or LayoutConfig()
        validate_layout(self._config)
        if logo is None and self._config.logo_path is not None and self._config.logo_path.exists():
            logo = self._config.logo_path.read_bytes()
        self._title = TitleBlock(self._config, logo)
        self._label_value = LabelValueBlock(self._config)
        self._tabular = TabularBlock(self._config)
        self._free_text = FreeTextBlock(self._config)
        self._footer = FooterBlock(self._config)

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def compose(
        self,
        record: Optional[MedicalRecordAggregate],
        generated_on: Optional[date] = None,
    ) -> ComposedReport:
        """Render *record* into a finished multi-page PDF.

        Raises ``MissingAggregateError`` before any page exists when *record*
        is ``None`` and ``RenderOverflowImpossible`` when a single table row
        cannot fit on a fresh page.  Either way no partial document escapes.
        """
        if record is None:
            raise MissingAggregateError()

        cfg = self._config
        canvas = PageCanvas(cfg, title=f"{DOCUMENT_TITLE} #{record.code}")
        state = RenderState.start(canvas, offset=0.0)
        cursor = state.cursor

        self._title.render(state, record, generated_on or date.today())

        self._label_value.render(
            state,
            "patient",
            SECTION_TITLES["patient"],
            label_value_rows(record, PATIENT_FIELDS),
        )
        self._label_value.render(
            state,
            "vitals",
            SECTION_TITLES["vitals"],
            label_value_rows(record, VITAL_SIGN_FIELDS),
            gap=cfg.section_gap,
        )

        if record.diagnoses:
            cursor.break_page()
            self._tabular.render(
                state,
                "diagnoses",
                SECTION_TITLES["diagnoses"],
                DIAGNOSIS_TABLE,
                diagnosis_rows(record.diagnoses),
            )

        if record.treatments:
            self._tabular.render(
                state,
                "treatments",
                SECTION_TITLES["treatments"],
                TREATMENT_TABLE,
                treatment_rows(record.treatments),
                gap=self._soft_break(state),
            )

        if record.exams:
            self._tabular.render(
                state,
                "exams",
                SECTION_TITLES["exams"],
                EXAM_TABLE,
                exam_rows(record.exams),
                gap=self._soft_break(state),
            )

        if record.has_narrative:
            self._free_text.render(
                state,
                "narrative",
                SECTION_TITLES["narrative"],
                record.description or "",
                gap=self._gap(state),
            )

        self._footer.render(state, record.professional)

        pdf = canvas.finish()
        report = ComposedReport(
            pdf=pdf,
            page_count=canvas.page_count,
            sections=tuple(state.sections),
            text_runs=canvas.text_runs,
        )
        log.info(
            "Composed %s into %d page(s), %d bytes",
            record_summary(record),
            report.page_count,
            len(pdf),
        )
        return report

    def _gap(self, state: RenderState) -> float:
        """Section gap, dropped right after a page break."""
        return 0.0 if state.cursor.at_page_top else self._config.section_gap

    def _soft_break(self, state: RenderState) -> float:
        """Break when past the soft threshold; return the gap to use."""
        cursor = state.cursor
        if cursor.would_overflow(0.0, limit=self._config.soft_break_threshold):
            log.debug(
                "Cursor at %.1f mm is past the soft threshold %.1f mm; breaking page",
                cursor.offset,
                self._config.soft_break_threshold,
            )
            cursor.break_page()
        return self._gap(state)
