"""Value formatting shared by every section of the report.

Dates are always rendered through ``format_long_date`` so the title, the
patient block and the clinical tables never drift apart.  The month names
are spelled out here instead of going through ``locale`` because the
process locale of a server is rarely ``es_ES``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

MONTHS_ES: tuple[str, ...] = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def format_long_date(value: Union[date, datetime]) -> str:
    """Long Spanish date, e.g. ``10 de enero de 2024``."""
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.day} de {MONTHS_ES[value.month - 1]} de {value.year}"


def format_number(value: float) -> str:
    """Drop a trailing ``.0`` so ``70.0`` kg prints as ``70``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_measure(value: Optional[float], unit: str) -> Optional[str]:
    """``72.5`` + ``kg`` -> ``72.5 kg``; ``None`` stays ``None`` for the placeholder path."""
    if value is None:
        return None
    return f"{format_number(value)}{unit}"


def join_name(*parts: Optional[str]) -> Optional[str]:
    """Join the present name parts; ``None`` when every part is blank."""
    present = [p.strip() for p in parts if p and p.strip()]
    return " ".join(present) if present else None
