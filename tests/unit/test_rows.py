"""Tests for the row builders behind each section."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from historial_report.models import Diagnosis, Exam, MedicalRecordAggregate, Patient, Treatment
from historial_report.rendering.rows import (
    DIAGNOSIS_TABLE,
    EXAM_TABLE,
    PATIENT_FIELDS,
    TREATMENT_TABLE,
    VITAL_SIGN_FIELDS,
    diagnosis_rows,
    exam_rows,
    label_value_rows,
    record_summary,
    treatment_rows,
)


class TestPatientRows:
    def test_values_rendered(self, bare_record: MedicalRecordAggregate) -> None:
        rows = dict(label_value_rows(bare_record, PATIENT_FIELDS))
        assert rows["Nombre Completo:"] == "Ana Pérez"
        assert rows["Código de Paciente:"] == "#42"
        assert rows["Fecha de Nacimiento:"] == "14 de marzo de 1985"
        assert rows["Email:"] == "ana.perez@example.com"

    def test_placeholders_agree_in_gender(self) -> None:
        record = MedicalRecordAggregate(code=1, date=date(2024, 1, 10), patient=Patient())
        rows = dict(label_value_rows(record, PATIENT_FIELDS))
        assert rows["Nombre Completo:"] == "No especificado"
        assert rows["Teléfono:"] == "No especificado"
        assert rows["Dirección:"] == "No especificada"
        assert rows["Fecha de Nacimiento:"] == "No especificada"

    def test_blank_string_uses_placeholder(self, bare_record: MedicalRecordAggregate) -> None:
        record = replace(bare_record, patient=replace(bare_record.patient, phone="   "))
        assert dict(label_value_rows(record, PATIENT_FIELDS))["Teléfono:"] == "No especificado"

    def test_never_empty_cell(self) -> None:
        record = MedicalRecordAggregate(code=1, date=date(2024, 1, 10))
        for _, value in label_value_rows(record, PATIENT_FIELDS + VITAL_SIGN_FIELDS):
            assert value.strip()


class TestVitalSignRows:
    def test_units(self, bare_record: MedicalRecordAggregate) -> None:
        rows = dict(label_value_rows(bare_record, VITAL_SIGN_FIELDS))
        assert rows["Peso:"] == "70 kg"
        assert rows["Estatura:"] == "172 cm"
        assert rows["Temperatura:"] == "36.6°C"
        assert rows["Nivel de Glucosa:"] == "95 mg/dL"

    def test_missing_weight(self, bare_record: MedicalRecordAggregate) -> None:
        rows = dict(label_value_rows(replace(bare_record, weight=None), VITAL_SIGN_FIELDS))
        assert rows["Peso:"] == "No especificado"

    def test_missing_pressure_is_feminine(self, bare_record: MedicalRecordAggregate) -> None:
        rows = dict(label_value_rows(replace(bare_record, blood_pressure=None), VITAL_SIGN_FIELDS))
        assert rows["Presión Arterial:"] == "No especificada"


class TestCollectionRows:
    def test_diagnosis_row(self) -> None:
        rows = diagnosis_rows([Diagnosis(code=1, description="Hipertensión", date=date(2024, 1, 10))])
        assert rows == [["10 de enero de 2024", "Hipertensión", "Activo"]]

    def test_inactive_diagnosis(self) -> None:
        rows = diagnosis_rows([Diagnosis(code=1, description="Gripe", date=date(2024, 1, 10), active=False)])
        assert rows[0][2] == "Inactivo"

    def test_open_treatment(self) -> None:
        rows = treatment_rows([Treatment(code=1, description="Reposo", start_date=date(2024, 2, 5))])
        assert rows == [["5 de febrero de 2024", "En curso", "Reposo", "Activo"]]

    def test_finished_treatment(self) -> None:
        t = Treatment(code=1, description="", start_date=date(2024, 2, 5), end_date=date(2024, 3, 1), active=False)
        assert treatment_rows([t]) == [["5 de febrero de 2024", "1 de marzo de 2024", "Sin descripción", "Finalizado"]]

    def test_exam_states_and_pending_results(self) -> None:
        exams = [
            Exam(code=1, type="Sangre", description="Hemograma", date=date(2024, 1, 12)),
            Exam(code=2, type="", description="Rx", date=date(2024, 1, 12), results="Normal", active=True),
        ]
        first, second = exam_rows(exams)
        assert first[3:] == ["Pendiente", "Pendiente"]
        assert second[1] == "No especificado"
        assert second[3:] == ["Normal", "Completado"]

    def test_order_preserved(self) -> None:
        diagnoses = [Diagnosis(code=i, description=f"D{i}", date=date(2024, 1, i + 1)) for i in range(5)]
        assert [r[1] for r in diagnosis_rows(diagnoses)] == ["D0", "D1", "D2", "D3", "D4"]


class TestTableSpecs:
    def test_widths_fill_content(self) -> None:
        for table in (DIAGNOSIS_TABLE, TREATMENT_TABLE, EXAM_TABLE):
            assert sum(table.widths(180.0)) == pytest.approx(180.0)
            assert len(table.columns) == len(table.shares)


def test_record_summary(full_record: MedicalRecordAggregate) -> None:
    assert record_summary(full_record) == "historial #1001 (1 diagnoses, 2 treatments, 2 exams)"
