"""Turn the aggregate into the rows each section draws.

Label/value sections are described by ``FieldSpec`` tuples: a label, how to
read the value, and the placeholder used when the value is absent.  The
placeholder is configured per field because Spanish placeholders agree in
gender with the label.  Tabular sections map every child record to one row
with kind-specific state labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from historial_report.formatting import format_long_date, format_measure, join_name
from historial_report.models import Diagnosis, Exam, MedicalRecordAggregate, Treatment
from historial_report.rendering.styles import (
    DIAGNOSIS_COLUMNS,
    DIAGNOSIS_STATE_LABELS,
    EXAM_COLUMNS,
    EXAM_STATE_LABELS,
    NO_DESCRIPTION,
    NOT_SPECIFIED_F,
    NOT_SPECIFIED_M,
    ONGOING,
    RESULTS_PENDING,
    TREATMENT_COLUMNS,
    TREATMENT_STATE_LABELS,
)


@dataclass(frozen=True)
class FieldSpec:
    """One row of a label/value section."""

    label: str
    read: Callable[[MedicalRecordAggregate], Optional[str]]
    placeholder: str = NOT_SPECIFIED_M

    def render(self, record: MedicalRecordAggregate) -> tuple[str, str]:
        value = self.read(record)
        if value is None or not str(value).strip():
            return self.label, self.placeholder
        return self.label, str(value)


@dataclass(frozen=True)
class TableSpec:
    """Columns and relative widths of a tabular section."""

    columns: tuple[str, ...]
    shares: tuple[float, ...]

    def widths(self, content_width: float) -> list[float]:
        return [content_width * s for s in self.shares]


def _table(columns: Sequence[tuple[str, float]]) -> TableSpec:
    return TableSpec(columns=tuple(c for c, _ in columns), shares=tuple(s for _, s in columns))


DIAGNOSIS_TABLE = _table(DIAGNOSIS_COLUMNS)
TREATMENT_TABLE = _table(TREATMENT_COLUMNS)
EXAM_TABLE = _table(EXAM_COLUMNS)


def _code(value: Optional[int]) -> Optional[str]:
    return None if value is None else f"#{value}"


def _date(value) -> Optional[str]:
    return None if value is None else format_long_date(value)


PATIENT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("Nombre Completo:", lambda r: join_name(r.patient.name, r.patient.surname)),
    FieldSpec("Código de Paciente:", lambda r: _code(r.patient.code)),
    FieldSpec("Fecha de Nacimiento:", lambda r: _date(r.patient.birth_date), NOT_SPECIFIED_F),
    FieldSpec("Género:", lambda r: r.patient.gender),
    FieldSpec("Teléfono:", lambda r: r.patient.phone),
    FieldSpec("Email:", lambda r: r.patient.email),
    FieldSpec("Dirección:", lambda r: r.patient.address, NOT_SPECIFIED_F),
)

VITAL_SIGN_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("Presión Arterial:", lambda r: r.blood_pressure, NOT_SPECIFIED_F),
    FieldSpec("Tipo de Sangre:", lambda r: r.blood_type),
    FieldSpec("Peso:", lambda r: format_measure(r.weight, " kg")),
    FieldSpec("Estatura:", lambda r: format_measure(r.height, " cm"), NOT_SPECIFIED_F),
    FieldSpec("Temperatura:", lambda r: format_measure(r.temperature, "°C"), NOT_SPECIFIED_F),
    FieldSpec("Nivel de Glucosa:", lambda r: format_measure(r.glucose_level, " mg/dL")),
)


def label_value_rows(record: MedicalRecordAggregate, fields: Sequence[FieldSpec]) -> list[tuple[str, str]]:
    return [f.render(record) for f in fields]


def _state(active: bool, labels: tuple[str, str]) -> str:
    return labels[0] if active else labels[1]


def _text(value: Optional[str], placeholder: str) -> str:
    return value if value and value.strip() else placeholder


def diagnosis_rows(diagnoses: Sequence[Diagnosis]) -> list[list[str]]:
    return [
        [
            format_long_date(d.date),
            _text(d.description, NO_DESCRIPTION),
            _state(d.active, DIAGNOSIS_STATE_LABELS),
        ]
        for d in diagnoses
    ]


def treatment_rows(treatments: Sequence[Treatment]) -> list[list[str]]:
    return [
        [
            format_long_date(t.start_date),
            format_long_date(t.end_date) if t.end_date else ONGOING,
            _text(t.description, NO_DESCRIPTION),
            _state(t.active, TREATMENT_STATE_LABELS),
        ]
        for t in treatments
    ]


def exam_rows(exams: Sequence[Exam]) -> list[list[str]]:
    return [
        [
            format_long_date(e.date),
            _text(e.type, NOT_SPECIFIED_M),
            _text(e.description, NO_DESCRIPTION),
            _text(e.results, RESULTS_PENDING),
            _state(e.active, EXAM_STATE_LABELS),
        ]
        for e in exams
    ]


def record_summary(record: MedicalRecordAggregate) -> str:
    """Short identity line used in log messages."""
    return (
        f"historial #{record.code} ({len(record.diagnoses)} diagnoses, "
        f"{len(record.treatments)} treatments, {len(record.exams)} exams)"
    )
