"""Section renderers: one strategy per kind of content block.

Every renderer receives the shared ``RenderState`` plus its payload, draws
through the ``PageCanvas`` and leaves the ``FlowCursor`` below what it drew.
Table-emitting renderers check up front whether the gap, the heading and a
first row still fit on the page and break proactively, so a heading is
never stranded at the bottom of a page.  The title and footer blocks sit at
fixed positions and do not flow.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from historial_report.core.config import LayoutConfig
from historial_report.exceptions import CanvasDrawError
from historial_report.formatting import format_long_date, join_name
from historial_report.layout.canvas import Align, TableMode, TextStyle
from historial_report.layout.cursor import RenderState, SectionPlacement
from historial_report.models import MedicalRecordAggregate, Professional
from historial_report.rendering.rows import TableSpec
from historial_report.rendering.styles import (
    BODY_TEXT_COLOR,
    DOCUMENT_TITLE,
    HEADING_COLOR,
    LOGO_BOX,
    NOT_SPECIFIED_M,
    RECORD_STATE_LABELS,
    SECTION_TITLES,
    TITLE_COLOR,
)

log = logging.getLogger(__name__)

# Tables may end a hair past the usable height after float accumulation.
_TOLERANCE_MM = 1e-6


class _BlockRenderer:
    def __init__(self, config: LayoutConfig) -> None:
        self._config = config

    @property
    def heading_style(self) -> TextStyle:
        return TextStyle(size=self._config.heading_font_size, color=HEADING_COLOR)

    @property
    def body_style(self) -> TextStyle:
        return TextStyle(size=self._config.body_font_size, color=BODY_TEXT_COLOR)

    def _place_heading(
        self, state: RenderState, key: str, title: str, gap: float, first_line: float
    ) -> SectionPlacement:
        """Break if needed, draw the heading and open the section placement."""
        cursor = state.cursor
        if cursor.would_overflow(gap + self._config.heading_gap + first_line):
            log.debug("Heading %r would overflow at %.1f mm; breaking page", title, cursor.offset)
            cursor.break_page()
            gap = 0.0
        cursor.advance(gap)
        placement = state.open_section(key, title)
        state.canvas.draw_text((self._config.left_margin, cursor.offset), title, self.heading_style)
        cursor.advance(self._config.heading_gap)
        return placement


class TitleBlock(_BlockRenderer):
    """Logo, document title, record date, code/state and generation date on page 1."""

    def __init__(self, config: LayoutConfig, logo: Optional[bytes] = None) -> None:
        super().__init__(config)
        self._logo = logo

    def render(self, state: RenderState, record: MedicalRecordAggregate, generated_on: date) -> float:
        canvas = state.canvas
        placement = state.open_section("title", SECTION_TITLES["title"])
        if self._logo:
            x, y, w, h = LOGO_BOX
            try:
                canvas.draw_image((x, y), self._logo, (w, h))
            except CanvasDrawError as exc:
                log.warning("Skipping logo on historial #%s: %s", record.code, exc)

        center = self._config.page_width / 2
        canvas.draw_text(
            (center, 30),
            DOCUMENT_TITLE,
            TextStyle(size=self._config.title_font_size, color=TITLE_COLOR, bold=True, align=Align.CENTER),
        )
        sub = TextStyle(size=12, color=BODY_TEXT_COLOR, align=Align.CENTER)
        state_label = RECORD_STATE_LABELS[0] if record.active else RECORD_STATE_LABELS[1]
        canvas.draw_text((center, 40), f"Fecha: {format_long_date(record.date)}", sub)
        canvas.draw_text((center, 45), f"Código: #{record.code}  |  Estado: {state_label}", sub)
        canvas.draw_text(
            (center, 50),
            f"Generado el {format_long_date(generated_on)}",
            TextStyle(size=9, color=BODY_TEXT_COLOR, italic=True, align=Align.CENTER),
        )

        state.cursor.move_to(self._config.flow_start)
        state.close_section(placement)
        return state.cursor.offset


class LabelValueBlock(_BlockRenderer):
    """Section heading followed by a headerless two-column table."""

    def render(
        self,
        state: RenderState,
        key: str,
        title: str,
        rows: Sequence[tuple[str, str]],
        *,
        gap: float = 0.0,
    ) -> float:
        cells = [list(r) for r in rows]
        first = (
            state.canvas.measure_row(cells[0], mode=TableMode.LABEL_VALUE)
            if cells
            else state.canvas.single_line_row_height
        )
        placement = self._place_heading(state, key, title, gap, first)
        cursor = state.cursor
        placed = state.canvas.draw_table(
            (self._config.left_margin, cursor.offset),
            cells,
            mode=TableMode.LABEL_VALUE,
            section=title,
        )
        cursor.adopt(placed)
        state.close_section(placement)
        return cursor.offset


class TabularBlock(_BlockRenderer):
    """Section heading followed by a headed, striped multi-column table."""

    def render(
        self,
        state: RenderState,
        key: str,
        title: str,
        table: TableSpec,
        rows: Sequence[Sequence[str]],
        *,
        gap: float = 0.0,
    ) -> float:
        canvas = state.canvas
        widths = table.widths(canvas.content_width)
        # header row plus the first body row, as actually wrapped, must fit under the heading
        first = canvas.measure_row(table.columns, mode=TableMode.HEADED, column_widths=widths, header=True)
        if rows:
            first += canvas.measure_row(rows[0], mode=TableMode.HEADED, column_widths=widths)
        placement = self._place_heading(state, key, title, gap, first)
        cursor = state.cursor
        placed = canvas.draw_table(
            (self._config.left_margin, cursor.offset),
            rows,
            mode=TableMode.HEADED,
            columns=table.columns,
            column_widths=widths,
            section=title,
        )
        if placed.pages_spanned > 1:
            log.debug("%s spans %d pages", title, placed.pages_spanned)
        cursor.adopt(placed)
        state.close_section(placement)
        return cursor.offset


class FreeTextBlock(_BlockRenderer):
    """Narrative text; embedded line breaks are kept, long lines wrap to the content width."""

    def render(self, state: RenderState, key: str, title: str, text: str, *, gap: float = 0.0) -> float:
        style = self.body_style
        line_height = self._config.body_font_size * 0.5
        placement = self._place_heading(state, key, title, gap, line_height)
        canvas = state.canvas
        cursor = state.cursor

        for raw_line in text.strip("\r\n").splitlines():
            # an empty source line still takes one line of vertical space
            pieces = canvas.wrap_text(raw_line, style) or [""]
            for piece in pieces:
                if cursor.would_overflow(line_height):
                    cursor.break_page()
                cursor.advance(line_height)
                if piece:
                    canvas.draw_text((self._config.left_margin, cursor.offset), piece, style)

        state.close_section(placement)
        return cursor.offset


class FooterBlock(_BlockRenderer):
    """Attending professional, pinned above the bottom edge of the last page.

    When the content of the last page already reaches into the footer band
    (``footer_offset`` larger than the bottom margin), the footer moves to a
    fresh page instead of overprinting it.
    """

    def render(self, state: RenderState, professional: Professional) -> None:
        canvas = state.canvas
        style = TextStyle(size=self._config.body_font_size, color=BODY_TEXT_COLOR)
        y = self._config.page_height - self._config.footer_offset
        if canvas.page_content_height() > y - self._config.footer_line_gap + _TOLERANCE_MM:
            log.warning(
                "Content reaches %.1f mm, into the footer at %.1f mm; footer moved to a new page",
                canvas.page_content_height(),
                y,
            )
            state.cursor.break_page()
        placement = state.open_section("footer", SECTION_TITLES["footer"])
        placement.start_offset = y

        name = join_name(professional.name, professional.surname)
        line = f"Atendido por: Dr. {name}" if name else f"Atendido por: {NOT_SPECIFIED_M}"
        if professional.code is not None:
            line = f"{line}  |  Cód. profesional: #{professional.code}"
        canvas.draw_text((self._config.left_margin, y), line, style)
        if professional.specialty and professional.specialty.strip():
            y += self._config.footer_line_gap
            canvas.draw_text((self._config.left_margin, y), f"Especialidad: {professional.specialty}", style)

        placement.last_page = state.cursor.page_index
        placement.end_offset = y
