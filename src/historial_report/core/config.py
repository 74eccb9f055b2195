"""Nested pydantic-settings configuration for the application.

Every group reads its own ``HISTORIAL_<GROUP>_*`` env vars, so the page
geometry can be tuned per deployment without touching the renderers::

    export HISTORIAL_LAYOUT_PAGE_SIZE=letter
    export HISTORIAL_LAYOUT_SOFT_BREAK_THRESHOLD=190
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# Page sizes in millimetres (width, height).
PAGE_SIZES_MM: dict[str, tuple[float, float]] = {
    "a4": (210.0, 297.0),
    "letter": (215.9, 279.4),
}


class LayoutConfig(BaseSettings):
    """Page geometry and typography for the historial PDF.

    All distances are millimetres measured from the top-left corner of the
    page. ``soft_break_threshold`` is the offset past which the treatments
    and exams sections start on a fresh page.

    Env vars use ``HISTORIAL_LAYOUT_`` prefix.
    """

    model_config = {"env_prefix": "HISTORIAL_LAYOUT_"}

    page_size: Literal["a4", "letter"] = "a4"
    left_margin: float = Field(default=15.0, ge=0.0, le=80.0)
    right_margin: float = Field(default=15.0, ge=0.0, le=80.0)
    top_margin: float = Field(default=20.0, ge=0.0, le=100.0)
    bottom_margin: float = Field(default=25.0, ge=0.0, le=100.0)
    flow_start: float = Field(default=60.0, gt=0.0)
    section_gap: float = Field(default=20.0, ge=0.0)
    heading_gap: float = Field(default=5.0, ge=0.0)
    soft_break_threshold: float = Field(default=200.0, gt=0.0)
    footer_offset: float = Field(default=20.0, gt=0.0)
    footer_line_gap: float = Field(default=5.0, ge=0.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=10, ge=6, le=72)
    heading_font_size: int = Field(default=16, ge=6, le=72)
    title_font_size: int = Field(default=20, ge=6, le=72)
    cell_padding: float = Field(default=2.0, ge=0.0, le=10.0)
    logo_path: Optional[Path] = None

    @property
    def page_width(self) -> float:
        return PAGE_SIZES_MM[self.page_size][0]

    @property
    def page_height(self) -> float:
        return PAGE_SIZES_MM[self.page_size][1]

    @property
    def usable_height(self) -> float:
        """Lowest offset content may reach before the bottom margin."""
        return self.page_height - self.bottom_margin

    @property
    def content_width(self) -> float:
        return self.page_width - self.left_margin - self.right_margin


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``HISTORIAL_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "HISTORIAL_OBSERVABILITY_"}

    service_name: str = "historial-report"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """FastAPI application metadata.

    Env vars use ``HISTORIAL_API_`` prefix.
    """

    model_config = {"env_prefix": "HISTORIAL_API_"}

    title: str = "Historial Report"
    description: str = "Renders medical records (historiales) into paginated PDF reports."


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs.

    Each sub-config reads its own ``HISTORIAL_<GROUP>_*`` env vars.
    """

    layout: LayoutConfig = LayoutConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    api: APIConfig = APIConfig()
