"""Output formatter protocol: the contract delivery code depends on.

The CLI and the API only need bytes and a MIME type, so they talk to this
protocol rather than to the composer directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from historial_report.models import MedicalRecordAggregate


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for report formatters."""

    def format(self, record: MedicalRecordAggregate, **kwargs: Any) -> bytes:
        """Render the record into output bytes."""
        ...

    def format_to_file(self, record: MedicalRecordAggregate, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type of the output (e.g. 'application/pdf')."""
        ...


__all__ = ["IOutputFormatter"]
