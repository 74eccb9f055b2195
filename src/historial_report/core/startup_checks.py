"""Startup validation: fail-fast on page geometry that cannot lay out a report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from historial_report.core.config import AppSettings, LayoutConfig

log = logging.getLogger(__name__)

# Below this width a five-column exams table is unreadable.
_MIN_CONTENT_WIDTH_MM = 80.0


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    validate_layout(settings.layout)


def validate_layout(layout: LayoutConfig) -> None:
    """Validate one layout config. Raises ValueError on fatal misconfig."""
    _check_content_width(layout)
    _check_vertical_bounds(layout)
    _check_logo(layout)


def _check_content_width(layout: LayoutConfig) -> None:
    if layout.content_width < _MIN_CONTENT_WIDTH_MM:
        raise ValueError(
            f"Left/right margins leave {layout.content_width:.1f} mm of content width "
            f"on a {layout.page_size} page; at least {_MIN_CONTENT_WIDTH_MM:.0f} mm is required."
        )


def _check_vertical_bounds(layout: LayoutConfig) -> None:
    usable = layout.usable_height
    if layout.top_margin >= usable:
        raise ValueError(
            f"HISTORIAL_LAYOUT_TOP_MARGIN={layout.top_margin} leaves no room above the "
            f"bottom margin (content must end by {usable:.1f} mm)."
        )
    if not layout.top_margin <= layout.flow_start < usable:
        raise ValueError(
            f"HISTORIAL_LAYOUT_FLOW_START={layout.flow_start} must lie between the top margin "
            f"({layout.top_margin}) and the usable height ({usable:.1f})."
        )
    if layout.soft_break_threshold >= usable:
        raise ValueError(
            f"HISTORIAL_LAYOUT_SOFT_BREAK_THRESHOLD={layout.soft_break_threshold} must be "
            f"below the usable height ({usable:.1f}), otherwise it never triggers."
        )
    if layout.footer_offset > layout.bottom_margin:
        log.warning(
            "Footer offset %.1f mm is larger than the bottom margin %.1f mm; "
            "a full last page pushes the footer onto a page of its own.",
            layout.footer_offset,
            layout.bottom_margin,
        )


def _check_logo(layout: LayoutConfig) -> None:
    """A missing logo is not fatal: the title block simply skips it."""
    if layout.logo_path is not None and not layout.logo_path.exists():
        log.warning("HISTORIAL_LAYOUT_LOGO_PATH=%s does not exist; reports will have no logo", layout.logo_path)
