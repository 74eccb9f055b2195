"""Logging setup for the CLI and the API."""

from __future__ import annotations

from historial_report.observability.logging_config import setup_logging

__all__ = ["setup_logging"]
