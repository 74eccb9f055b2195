"""Fixed-size drawing surface backed by a reportlab canvas.

Every placement is position-explicit: callers pass ``(x, y)`` in millimetres
measured from the top-left corner of the page.  Flow (where the next block
goes, when to break) belongs to ``FlowCursor`` and the composer; the canvas
only reports back where things ended up.

Tables are laid out row by row with fixed column widths.  When the next row
does not fit above the bottom margin the canvas starts a new page, repeats
the header row (headed tables) and carries on, so one table may span any
number of pages.  ``draw_table`` returns the page and offset where it
finished instead of leaving that in ambient state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from historial_report.core.config import LayoutConfig
from historial_report.exceptions import CanvasDrawError, RenderOverflowImpossible
from historial_report.rendering.styles import (
    LABEL_COLUMN_WIDTH,
    TABLE_GRID_COLOR,
    TABLE_HEADER_FILL,
    TABLE_HEADER_TEXT,
    TABLE_STRIPE_FILL,
    TABLE_TEXT_COLOR,
)

try:
    from reportlab.lib.colors import Color
    from reportlab.lib.styles import ParagraphStyle
    from reportlab.lib.units import mm
    from reportlab.lib.utils import ImageReader, simpleSplit
    from reportlab.pdfgen.canvas import Canvas
    from reportlab.platypus import Paragraph, Table, TableStyle
except ImportError as _exc:
    raise ImportError(
        "reportlab is required for PDF output. Install with: pip install historial-report"
    ) from _exc

log = logging.getLogger(__name__)

# Row measurements are done against an effectively unbounded height.
_UNBOUNDED = 10_000 * mm
_EPSILON = 1e-6


class TableMode(str, Enum):
    """How ``draw_table`` renders its rows."""

    LABEL_VALUE = "label_value"  # headerless, two columns, bold label column
    HEADED = "headed"  # header row with heading fill, striped body


class Align(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class TextStyle:
    size: float
    color: tuple[int, int, int]
    bold: bool = False
    italic: bool = False
    align: Align = Align.LEFT


@dataclass(frozen=True)
class TextRun:
    """A piece of text placed on a page (free text or a table cell)."""

    page_index: int
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class TablePlacement:
    """Where a table started and finished."""

    first_page: int
    page_index: int
    final_offset: float
    rows_drawn: int

    @property
    def pages_spanned(self) -> int:
        return self.page_index - self.first_page + 1


def _rgb(color: tuple[int, int, int]) -> Color:
    r, g, b = color
    return Color(r / 255.0, g / 255.0, b / 255.0)


class PageCanvas:
    """Drawing surface for one report; never shared between compositions."""

    def __init__(self, config: LayoutConfig, title: str = "", author: str = "") -> None:
        self._config = config
        self._buffer = BytesIO()
        self._page_w = config.page_width * mm
        self._page_h = config.page_height * mm
        self._canvas = Canvas(self._buffer, pagesize=(self._page_w, self._page_h))
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        self._page_index = 0
        self._content_bottom = 0.0
        self._runs: list[TextRun] = []
        self._finished = False
        self._cell_styles = self._build_cell_styles()

    # ── Geometry ─────────────────────────────────────────────────────

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_count(self) -> int:
        return self._page_index + 1

    @property
    def usable_height(self) -> float:
        return self._config.usable_height

    @property
    def top_margin(self) -> float:
        return self._config.top_margin

    @property
    def text_runs(self) -> tuple[TextRun, ...]:
        return tuple(self._runs)

    @property
    def content_width(self) -> float:
        return self._config.content_width

    @property
    def single_line_row_height(self) -> float:
        """Height of a table row holding one line of body text."""
        return self._config.body_font_size * 1.2 / mm + 2 * self._config.cell_padding

    def page_content_height(self) -> float:
        """Lowest offset drawn on the current page so far (0 on a blank page)."""
        return self._content_bottom

    def new_page(self) -> int:
        """Close the current page and return the index of the new one."""
        self._ensure_open()
        self._canvas.showPage()
        self._page_index += 1
        self._content_bottom = 0.0
        log.debug("Started page %d", self._page_index + 1)
        return self._page_index

    def finish(self) -> bytes:
        """Write the document and return the PDF bytes."""
        self._ensure_open()
        self._canvas.save()
        self._finished = True
        return self._buffer.getvalue()

    # ── Primitives ───────────────────────────────────────────────────

    def draw_text(self, position: tuple[float, float], content: str, style: TextStyle) -> None:
        """Draw one line of text with its baseline at ``position``."""
        self._ensure_open()
        x, y = position
        c = self._canvas
        c.setFont(self._font_name(style.bold, style.italic), style.size)
        c.setFillColor(_rgb(style.color))
        px, py = x * mm, self._page_h - y * mm
        if style.align is Align.CENTER:
            c.drawCentredString(px, py, content)
        elif style.align is Align.RIGHT:
            c.drawRightString(px, py, content)
        else:
            c.drawString(px, py, content)
        self._record(x, y, content)
        self._content_bottom = max(self._content_bottom, y)

    def draw_image(self, position: tuple[float, float], data: bytes, size: tuple[float, float]) -> None:
        """Draw an image with its top-left corner at ``position``.

        Raises ``CanvasDrawError`` when the payload cannot be decoded.
        """
        self._ensure_open()
        x, y = position
        w, h = size
        try:
            reader = ImageReader(BytesIO(data))
            self._canvas.drawImage(
                reader,
                x * mm,
                self._page_h - (y + h) * mm,
                width=w * mm,
                height=h * mm,
                mask="auto",
            )
        except Exception as exc:
            raise CanvasDrawError(f"Could not draw image ({len(data)} bytes): {exc}") from exc
        self._content_bottom = max(self._content_bottom, y + h)

    def measure_row(
        self,
        cells: Sequence[str],
        *,
        mode: TableMode,
        column_widths: Optional[Sequence[float]] = None,
        header: bool = False,
    ) -> float:
        """Height in mm that one row of ``cells`` takes once wrapped to its column widths."""
        columns = cells if mode is TableMode.HEADED else None
        widths = self._resolve_widths(mode, [cells], columns, column_widths)
        return self._measure(self._build_row(cells, widths, mode, header=header), widths)

    def wrap_text(self, content: str, style: TextStyle, width: Optional[float] = None) -> list[str]:
        """Split one line of text into lines that fit ``width`` (default: content width)."""
        max_w = (width if width is not None else self._config.content_width) * mm
        return simpleSplit(content, self._font_name(style.bold, style.italic), style.size, max_w)

    def draw_table(
        self,
        position: tuple[float, float],
        rows: Sequence[Sequence[str]],
        *,
        mode: TableMode,
        columns: Optional[Sequence[str]] = None,
        column_widths: Optional[Sequence[float]] = None,
        section: Optional[str] = None,
    ) -> TablePlacement:
        """Draw a table starting at ``position``, paginating as needed.

        ``mode`` is always explicit: ``LABEL_VALUE`` tables take no header
        and exactly two cells per row; ``HEADED`` tables require ``columns``.
        Raises ``RenderOverflowImpossible`` when a single row (plus the
        repeated header) is taller than a fresh page.
        """
        self._ensure_open()
        widths = self._resolve_widths(mode, rows, columns, column_widths)
        x, y = position
        first_page = self._page_index

        header = self._build_row(columns, widths, mode, header=True) if mode is TableMode.HEADED else None
        header_h = self._measure(header, widths) if header is not None else 0.0
        pending_header = header is not None
        drawn = 0

        for idx, cells in enumerate(rows):
            row = self._build_row(cells, widths, mode, stripe=idx % 2 == 1)
            row_h = self._measure(row, widths)
            needed = (header_h if pending_header else 0.0) + row_h
            if y + needed > self.usable_height + _EPSILON:
                fresh_needed = header_h + row_h
                available = self.usable_height - self.top_margin
                if fresh_needed > available + _EPSILON:
                    raise RenderOverflowImpossible(section, fresh_needed, available)
                log.debug(
                    "Table %s row %d does not fit at %.1f mm; continuing on a new page",
                    section or "?",
                    idx,
                    y,
                )
                self.new_page()
                y = self.top_margin
                pending_header = header is not None
            if pending_header:
                y = self._draw_row(header, columns or (), widths, x, y, header_h)
                pending_header = False
            y = self._draw_row(row, cells, widths, x, y, row_h)
            drawn += 1

        if pending_header and not rows:
            y = self._draw_row(header, columns or (), widths, x, y, header_h)

        return TablePlacement(first_page=first_page, page_index=self._page_index, final_offset=y, rows_drawn=drawn)

    # ── Internals ────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self._finished:
            raise CanvasDrawError("The document has already been written; start a new PageCanvas.")

    def _font_name(self, bold: bool, italic: bool = False) -> str:
        family = self._config.font_family
        if bold and italic:
            return f"{family}-BoldOblique"
        if bold:
            return f"{family}-Bold"
        if italic:
            return f"{family}-Oblique"
        return family

    def _record(self, x: float, y: float, text: str) -> None:
        self._runs.append(TextRun(page_index=self._page_index, x=x, y=y, text=text))

    def _build_cell_styles(self) -> dict[str, ParagraphStyle]:
        size = self._config.body_font_size
        leading = size * 1.2
        return {
            "cell": ParagraphStyle(
                "cell",
                fontName=self._font_name(False),
                fontSize=size,
                leading=leading,
                textColor=_rgb(TABLE_TEXT_COLOR),
            ),
            "label": ParagraphStyle(
                "label",
                fontName=self._font_name(True),
                fontSize=size,
                leading=leading,
                textColor=_rgb(TABLE_TEXT_COLOR),
            ),
            "header": ParagraphStyle(
                "header",
                fontName=self._font_name(True),
                fontSize=size,
                leading=leading,
                textColor=_rgb(TABLE_HEADER_TEXT),
            ),
        }

    def _resolve_widths(
        self,
        mode: TableMode,
        rows: Sequence[Sequence[str]],
        columns: Optional[Sequence[str]],
        column_widths: Optional[Sequence[float]],
    ) -> list[float]:
        content_w = self._config.content_width
        if mode is TableMode.LABEL_VALUE:
            if columns is not None:
                raise ValueError("LABEL_VALUE tables are headerless; pass mode=TableMode.HEADED for columns")
            bad = [r for r in rows if len(r) != 2]
            if bad:
                raise ValueError(f"LABEL_VALUE rows need exactly 2 cells, got {len(bad[0])}")
            ncols = 2
        else:
            if not columns:
                raise ValueError("HEADED tables require column headers")
            ncols = len(columns)
            bad = [r for r in rows if len(r) != ncols]
            if bad:
                raise ValueError(f"Expected {ncols} cells per row, got {len(bad[0])}")

        if column_widths is not None:
            if len(column_widths) != ncols:
                raise ValueError(f"Expected {ncols} column widths, got {len(column_widths)}")
            return list(column_widths)
        if mode is TableMode.LABEL_VALUE:
            return [LABEL_COLUMN_WIDTH, content_w - LABEL_COLUMN_WIDTH]
        return [content_w / ncols] * ncols

    def _build_row(
        self,
        cells: Optional[Sequence[str]],
        widths: Sequence[float],
        mode: TableMode,
        *,
        header: bool = False,
        stripe: bool = False,
    ) -> Table:
        values = list(cells or ())
        if header:
            styles = [self._cell_styles["header"]] * len(values)
        elif mode is TableMode.LABEL_VALUE:
            styles = [self._cell_styles["label"], self._cell_styles["cell"]]
        else:
            styles = [self._cell_styles["cell"]] * len(values)

        paragraphs = [
            Paragraph(escape(str(v)).replace("\n", "<br/>"), s) for v, s in zip(values, styles)
        ]
        table = Table([paragraphs], colWidths=[w * mm for w in widths])

        pad = self._config.cell_padding * mm
        commands: list[tuple] = [
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), pad),
            ("BOTTOMPADDING", (0, 0), (-1, -1), pad),
            ("LEFTPADDING", (0, 0), (-1, -1), pad),
            ("RIGHTPADDING", (0, 0), (-1, -1), pad),
        ]
        if header:
            commands.append(("BACKGROUND", (0, 0), (-1, -1), _rgb(TABLE_HEADER_FILL)))
        elif mode is TableMode.HEADED:
            commands.append(("LINEBELOW", (0, 0), (-1, -1), 0.25, _rgb(TABLE_GRID_COLOR)))
            if stripe:
                commands.append(("BACKGROUND", (0, 0), (-1, -1), _rgb(TABLE_STRIPE_FILL)))
        table.setStyle(TableStyle(commands))
        return table

    def _measure(self, table: Table, widths: Sequence[float]) -> float:
        _, height = table.wrapOn(self._canvas, sum(widths) * mm, _UNBOUNDED)
        return height / mm

    def _draw_row(
        self,
        table: Table,
        cells: Sequence[str],
        widths: Sequence[float],
        x: float,
        y: float,
        height: float,
    ) -> float:
        table.drawOn(self._canvas, x * mm, self._page_h - (y + height) * mm)
        cx = x
        for value, w in zip(cells, widths):
            self._record(cx, y, str(value))
            cx += w
        bottom = y + height
        self._content_bottom = max(self._content_bottom, bottom)
        return bottom
