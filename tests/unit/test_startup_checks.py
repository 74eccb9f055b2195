"""Tests for startup validation checks."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from historial_report.core.config import AppSettings, LayoutConfig
from historial_report.core.startup_checks import validate_layout, validate_settings


class TestGeometryValidation:
    def test_defaults_pass(self) -> None:
        validate_settings(AppSettings(layout=LayoutConfig()))

    def test_rejects_narrow_content(self) -> None:
        with pytest.raises(ValueError, match="content width"):
            validate_layout(LayoutConfig(left_margin=70.0, right_margin=70.0))

    def test_rejects_flow_start_below_usable_area(self) -> None:
        with pytest.raises(ValueError, match="HISTORIAL_LAYOUT_FLOW_START"):
            validate_layout(LayoutConfig(flow_start=280.0))

    def test_rejects_flow_start_above_top_margin(self) -> None:
        with pytest.raises(ValueError, match="HISTORIAL_LAYOUT_FLOW_START"):
            validate_layout(LayoutConfig(flow_start=10.0))

    def test_rejects_unreachable_soft_threshold(self) -> None:
        with pytest.raises(ValueError, match="HISTORIAL_LAYOUT_SOFT_BREAK_THRESHOLD"):
            validate_layout(LayoutConfig(soft_break_threshold=272.0))

    def test_footer_below_margin_only_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="historial_report.core.startup_checks"):
            validate_layout(LayoutConfig(footer_offset=30.0))
        assert "Footer offset" in caplog.text


class TestLogoCheck:
    def test_missing_logo_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="historial_report.core.startup_checks"):
            validate_layout(LayoutConfig(logo_path=tmp_path / "nope.png"))
        assert "does not exist" in caplog.text

    def test_existing_logo_is_silent(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        logo = tmp_path / "logo.png"
        logo.write_bytes(b"png")
        with caplog.at_level(logging.WARNING, logger="historial_report.core.startup_checks"):
            validate_layout(LayoutConfig(logo_path=logo))
        assert caplog.text == ""
