"""Centralized style constants and labels for the historial PDF."""

from __future__ import annotations

# ── Colour palette (RGB 0-255) ───────────────────────────────────────
# Plain tuples so the canvas can convert to whatever colour object the
# drawing library requires.

TITLE_COLOR: tuple[int, int, int] = (44, 62, 80)
HEADING_COLOR: tuple[int, int, int] = (41, 128, 185)
BODY_TEXT_COLOR: tuple[int, int, int] = (52, 73, 94)
TABLE_TEXT_COLOR: tuple[int, int, int] = (60, 60, 60)
TABLE_HEADER_FILL: tuple[int, int, int] = HEADING_COLOR
TABLE_HEADER_TEXT: tuple[int, int, int] = (255, 255, 255)
TABLE_STRIPE_FILL: tuple[int, int, int] = (245, 245, 245)
TABLE_GRID_COLOR: tuple[int, int, int] = (220, 224, 230)

# ── Document text ────────────────────────────────────────────────────

DOCUMENT_TITLE = "Historial Médico"
LOGO_BOX = (10.0, 10.0, 30.0, 30.0)  # x, y, width, height in mm

SECTION_TITLES: dict[str, str] = {
    "title": "Historial Médico",
    "patient": "Información del Paciente",
    "vitals": "Signos Vitales",
    "diagnoses": "Diagnósticos",
    "treatments": "Tratamientos",
    "exams": "Exámenes",
    "narrative": "Descripción",
    "footer": "Profesional",
}

# ── Placeholders ─────────────────────────────────────────────────────
# Spanish placeholders agree in gender with the label they complete
# ("Dirección: No especificada", "Teléfono: No especificado").

NOT_SPECIFIED_M = "No especificado"
NOT_SPECIFIED_F = "No especificada"
NO_DESCRIPTION = "Sin descripción"
ONGOING = "En curso"
RESULTS_PENDING = "Pendiente"

# ── State labels per collection kind (True label, False label) ───────

RECORD_STATE_LABELS = ("Activo", "Inactivo")
DIAGNOSIS_STATE_LABELS = ("Activo", "Inactivo")
TREATMENT_STATE_LABELS = ("Activo", "Finalizado")
EXAM_STATE_LABELS = ("Completado", "Pendiente")

# ── Column layouts (header, share of content width) ──────────────────

DIAGNOSIS_COLUMNS: tuple[tuple[str, float], ...] = (
    ("Fecha", 0.25),
    ("Descripción", 0.55),
    ("Estado", 0.20),
)
TREATMENT_COLUMNS: tuple[tuple[str, float], ...] = (
    ("Fecha Inicio", 0.20),
    ("Fecha Fin", 0.20),
    ("Descripción", 0.42),
    ("Estado", 0.18),
)
EXAM_COLUMNS: tuple[tuple[str, float], ...] = (
    ("Fecha", 0.18),
    ("Tipo", 0.15),
    ("Descripción", 0.27),
    ("Resultados", 0.24),
    ("Estado", 0.16),
)

LABEL_COLUMN_WIDTH = 40.0  # mm, bold label column of label/value tables
