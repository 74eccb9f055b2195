"""Configuration and startup validation."""

from __future__ import annotations

from historial_report.core.config import APIConfig, AppSettings, LayoutConfig, ObservabilityConfig

__all__ = ["APIConfig", "AppSettings", "LayoutConfig", "ObservabilityConfig"]
