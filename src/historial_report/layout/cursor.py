"""Flow cursor and per-composition render state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from historial_report.layout.canvas import PageCanvas, TablePlacement

log = logging.getLogger(__name__)


@dataclass
class FlowCursor:
    """Vertical write position ``(page_index, offset)`` shared by all sections.

    The cursor never draws; it tracks where the next block starts and asks
    the canvas for a new page when the composer or a renderer decides to
    break.
    """

    canvas: PageCanvas
    page_index: int = 0
    offset: float = 0.0

    @property
    def usable_height(self) -> float:
        return self.canvas.usable_height

    @property
    def top_margin(self) -> float:
        return self.canvas.top_margin

    @property
    def at_page_top(self) -> bool:
        """True right after a page break, before anything flowed onto the page."""
        return self.offset <= self.top_margin

    def advance(self, by: float) -> float:
        self.offset += by
        return self.offset

    def move_to(self, offset: float) -> None:
        self.offset = offset

    def would_overflow(self, needed_height: float, limit: Optional[float] = None) -> bool:
        """Would ``needed_height`` more millimetres cross ``limit`` (default: usable height)?"""
        bound = self.usable_height if limit is None else limit
        return self.offset + needed_height > bound

    def break_page(self) -> int:
        """Start a new page and reset the offset to the top margin."""
        self.page_index = self.canvas.new_page()
        self.offset = self.top_margin
        log.debug("Page break -> page %d", self.page_index + 1)
        return self.page_index

    def adopt(self, placement: TablePlacement) -> None:
        """Continue below a table, on whichever page the table ended."""
        self.page_index = placement.page_index
        self.offset = placement.final_offset


@dataclass
class SectionPlacement:
    """Where one logical section of the report landed."""

    key: str
    title: str
    first_page: int
    start_offset: float
    last_page: int = 0
    end_offset: float = 0.0


@dataclass
class RenderState:
    """Mutable state owned by exactly one ``compose()`` call."""

    canvas: PageCanvas
    cursor: FlowCursor
    sections: list[SectionPlacement] = field(default_factory=list)

    @classmethod
    def start(cls, canvas: PageCanvas, offset: float) -> RenderState:
        return cls(canvas=canvas, cursor=FlowCursor(canvas=canvas, page_index=canvas.page_index, offset=offset))

    def open_section(self, key: str, title: str) -> SectionPlacement:
        placement = SectionPlacement(
            key=key,
            title=title,
            first_page=self.cursor.page_index,
            start_offset=self.cursor.offset,
        )
        self.sections.append(placement)
        return placement

    def close_section(self, placement: SectionPlacement) -> None:
        placement.last_page = self.cursor.page_index
        placement.end_offset = self.cursor.offset
        log.debug(
            "Section %s: page %d @ %.1f -> page %d @ %.1f",
            placement.key,
            placement.first_page + 1,
            placement.start_offset,
            placement.last_page + 1,
            placement.end_offset,
        )
