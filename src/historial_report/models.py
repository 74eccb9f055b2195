"""Medical record aggregate: the read-only input of the report composer.

The surrounding CRUD layer resolves a historial together with its patient,
professional and child collections and hands it over as one
``MedicalRecordAggregate``.  All dataclasses are frozen and collections are
tuples so renderers cannot mutate the input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Patient:
    """The person the historial belongs to (``persona`` in the CRUD API)."""

    code: Optional[int] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Professional:
    """Attending professional who signs the historial."""

    code: Optional[int] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    specialty: Optional[str] = None


@dataclass(frozen=True)
class Diagnosis:
    code: int
    description: str
    date: date
    active: bool = True


@dataclass(frozen=True)
class Treatment:
    code: int
    description: str
    start_date: date
    end_date: Optional[date] = None
    active: bool = True


@dataclass(frozen=True)
class Exam:
    code: int
    type: str
    description: str
    date: date
    results: Optional[str] = None
    active: bool = False


@dataclass(frozen=True)
class MedicalRecordAggregate:
    """One historial with everything the report needs, fully resolved."""

    code: int
    date: date
    patient: Patient = field(default_factory=Patient)
    professional: Professional = field(default_factory=Professional)
    active: bool = True
    blood_pressure: Optional[str] = None
    blood_type: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    temperature: Optional[float] = None
    glucose_level: Optional[float] = None
    diagnoses: tuple[Diagnosis, ...] = ()
    treatments: tuple[Treatment, ...] = ()
    exams: tuple[Exam, ...] = ()
    description: Optional[str] = None

    @property
    def has_narrative(self) -> bool:
        return bool(self.description and self.description.strip())
