"""Shared fixtures for historial-report tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from historial_report.core.config import LayoutConfig
from historial_report.models import (
    Diagnosis,
    Exam,
    MedicalRecordAggregate,
    Patient,
    Professional,
    Treatment,
)

GENERATED_ON = date(2024, 2, 1)


@pytest.fixture
def layout() -> LayoutConfig:
    """A4 layout with the break policy pinned explicitly."""
    return LayoutConfig(page_size="a4", soft_break_threshold=200.0, section_gap=20.0, logo_path=None)


@pytest.fixture
def patient() -> Patient:
    return Patient(
        code=42,
        name="Ana",
        surname="Pérez",
        birth_date=date(1985, 3, 14),
        gender="Femenino",
        address="Av. Central 123",
        phone="+591 70000000",
        email="ana.perez@example.com",
    )


@pytest.fixture
def professional() -> Professional:
    return Professional(code=7, name="Luis", surname="Rojas", specialty="Cardiología")


@pytest.fixture
def bare_record(patient: Patient, professional: Professional) -> MedicalRecordAggregate:
    """A historial with vitals but no diagnoses, treatments, exams or narrative."""
    return MedicalRecordAggregate(
        code=1001,
        date=date(2024, 1, 10),
        patient=patient,
        professional=professional,
        blood_pressure="120/80",
        blood_type="O+",
        weight=70.0,
        height=172.0,
        temperature=36.6,
        glucose_level=95.0,
    )


def make_diagnoses(n: int, description: str = "Hipertensión") -> tuple[Diagnosis, ...]:
    return tuple(
        Diagnosis(code=i + 1, description=f"{description} {i + 1}", date=date(2024, 1, 10), active=i % 2 == 0)
        for i in range(n)
    )


def make_treatments(n: int) -> tuple[Treatment, ...]:
    return tuple(
        Treatment(
            code=i + 1,
            description=f"Enalapril 10 mg dosis {i + 1}",
            start_date=date(2024, 1, 10),
            end_date=None if i % 2 == 0 else date(2024, 3, 1),
            active=i % 2 == 0,
        )
        for i in range(n)
    )


def make_exams(n: int) -> tuple[Exam, ...]:
    return tuple(
        Exam(
            code=i + 1,
            type="Sangre",
            description=f"Hemograma {i + 1}",
            date=date(2024, 1, 12),
            results=None if i % 2 == 0 else "Normal",
            active=i % 2 == 1,
        )
        for i in range(n)
    )


@pytest.fixture
def full_record(bare_record: MedicalRecordAggregate) -> MedicalRecordAggregate:
    """One of everything, plus a short narrative."""
    return replace(
        bare_record,
        diagnoses=make_diagnoses(1),
        treatments=make_treatments(2),
        exams=make_exams(2),
        description="Paciente estable.\nControl en 30 días.",
    )


@pytest.fixture
def historial_json() -> dict:
    """Payload in the shape served by the historial CRUD API."""
    return {
        "cod_historial": 1001,
        "fecha": "2024-01-10T00:00:00.000Z",
        "estado": True,
        "descripcion": "Paciente estable.",
        "tipo_sangre": "O+",
        "presion_arterial": "120/80",
        "peso": 70,
        "estatura": 172,
        "temperatura": 36.6,
        "nivel_glucosa": 95,
        "persona": {
            "cod_paciente": 42,
            "nombre": "Ana",
            "apellido": "Pérez",
            "fecha_nacimiento": "1985-03-14",
            "genero": "Femenino",
            "direccion": "Av. Central 123",
            "telefono": "+591 70000000",
            "email": "ana.perez@example.com",
        },
        "profesional": {"cod_usuario": 7, "nombre": "Luis", "apellido": "Rojas", "especialidad": "Cardiología"},
        "diagnosticos": [
            {"cod_diagnostico": 1, "descripcion": "Hipertensión", "fecha": "2024-01-10T00:00:00.000Z", "estado": True}
        ],
        "tratamientos": [
            {
                "cod_tratamiento": 1,
                "descripcion": "Enalapril 10 mg",
                "fecha_inicio": "2024-01-10",
                "fecha_fin": None,
                "estado": True,
            }
        ],
        "examenes": [
            {
                "cod_examen": 1,
                "tipo": "Sangre",
                "descripcion": "Hemograma",
                "fecha": "2024-01-12",
                "resultados": None,
                "estado": False,
            }
        ],
        "created_at": "2024-01-10T09:00:00.000Z",
    }
