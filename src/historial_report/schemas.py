"""Pydantic wire schema for historial payloads.

Mirrors the JSON the historial CRUD service returns (Spanish field names,
ISO datetimes, optional nested ``persona``/``profesional`` and child
collections) and converts it into a ``MedicalRecordAggregate``.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from historial_report.exceptions import SchemaError
from historial_report.models import (
    Diagnosis,
    Exam,
    MedicalRecordAggregate,
    Patient,
    Professional,
    Treatment,
)


def _date_part(value: Any) -> Any:
    """Accept ``2024-01-10T00:00:00.000Z`` style strings for date fields."""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


# Dates arrive either as "2024-01-10" or as full ISO datetimes.
WireDate = Annotated[date, BeforeValidator(_date_part)]


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class PersonaPayload(_WireModel):
    cod_paciente: Optional[int] = None
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    fecha_nacimiento: Optional[WireDate] = None
    genero: Optional[str] = None
    direccion: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None

    def to_patient(self) -> Patient:
        return Patient(
            code=self.cod_paciente,
            name=self.nombre,
            surname=self.apellido,
            birth_date=self.fecha_nacimiento,
            gender=self.genero,
            address=self.direccion,
            phone=self.telefono,
            email=self.email,
        )


class ProfesionalPayload(_WireModel):
    cod_usuario: Optional[int] = None
    nombre: Optional[str] = None
    apellido: Optional[str] = None
    especialidad: Optional[str] = None

    def to_professional(self) -> Professional:
        return Professional(
            code=self.cod_usuario,
            name=self.nombre,
            surname=self.apellido,
            specialty=self.especialidad,
        )


class DiagnosticoPayload(_WireModel):
    cod_diagnostico: int
    descripcion: str = ""
    fecha: WireDate
    estado: bool = True


class TratamientoPayload(_WireModel):
    cod_tratamiento: int
    descripcion: str = ""
    fecha_inicio: WireDate
    fecha_fin: Optional[WireDate] = None
    estado: bool = True


class ExamenPayload(_WireModel):
    cod_examen: int
    tipo: str = ""
    descripcion: str = ""
    fecha: WireDate
    resultados: Optional[str] = None
    estado: bool = False


class HistorialPayload(_WireModel):
    """A historial as served by the CRUD API, with its relations resolved."""

    cod_historial: int
    fecha: WireDate
    estado: bool = True
    descripcion: Optional[str] = None
    tipo_sangre: Optional[str] = None
    presion_arterial: Optional[str] = None
    peso: Optional[float] = None
    estatura: Optional[float] = None
    temperatura: Optional[float] = None
    nivel_glucosa: Optional[float] = None
    persona: Optional[PersonaPayload] = None
    profesional: Optional[ProfesionalPayload] = None
    diagnosticos: list[DiagnosticoPayload] = Field(default_factory=list)
    tratamientos: list[TratamientoPayload] = Field(default_factory=list)
    examenes: list[ExamenPayload] = Field(default_factory=list)

    @field_validator("diagnosticos", "tratamientos", "examenes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_aggregate(self) -> MedicalRecordAggregate:
        """Convert to the immutable aggregate, keeping child order as received."""
        return MedicalRecordAggregate(
            code=self.cod_historial,
            date=self.fecha,
            active=self.estado,
            patient=self.persona.to_patient() if self.persona else Patient(),
            professional=self.profesional.to_professional() if self.profesional else Professional(),
            blood_pressure=self.presion_arterial,
            blood_type=self.tipo_sangre,
            weight=self.peso,
            height=self.estatura,
            temperature=self.temperatura,
            glucose_level=self.nivel_glucosa,
            diagnoses=tuple(
                Diagnosis(code=d.cod_diagnostico, description=d.descripcion, date=d.fecha, active=d.estado)
                for d in self.diagnosticos
            ),
            treatments=tuple(
                Treatment(
                    code=t.cod_tratamiento,
                    description=t.descripcion,
                    start_date=t.fecha_inicio,
                    end_date=t.fecha_fin,
                    active=t.estado,
                )
                for t in self.tratamientos
            ),
            exams=tuple(
                Exam(
                    code=e.cod_examen,
                    type=e.tipo,
                    description=e.descripcion,
                    date=e.fecha,
                    results=e.resultados,
                    active=e.estado,
                )
                for e in self.examenes
            ),
            description=self.descripcion,
        )


def load_aggregate(raw: Any) -> MedicalRecordAggregate:
    """Validate a decoded JSON object and convert it. Raises ``SchemaError``."""
    try:
        return HistorialPayload.model_validate(raw).to_aggregate()
    except ValidationError as exc:
        raise SchemaError(f"Invalid historial payload: {exc}") from exc
