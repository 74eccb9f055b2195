"""Report endpoints: render a historial payload as PDF or as a layout summary."""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response

from historial_report.formatters.pdf_formatter import PDFFormatter
from historial_report.schemas import HistorialPayload

router = APIRouter(prefix="/reports", tags=["reports"])


class Disposition(str, Enum):
    INLINE = "inline"
    ATTACHMENT = "attachment"


def _formatter(request: Request) -> PDFFormatter:
    return request.app.state.formatter


# Plain ``def`` routes: composition is CPU-bound and runs in the threadpool.


@router.post("/historial")
def render_historial(
    payload: HistorialPayload,
    request: Request,
    disposition: Disposition = Query(Disposition.INLINE),
) -> Response:
    """Render the historial PDF, to view (inline) or download (attachment)."""
    report = _formatter(request).compose(payload.to_aggregate())
    filename = f"historial_{payload.cod_historial}.pdf"
    return Response(
        content=report.pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'{disposition.value}; filename="{filename}"',
            "X-Report-Pages": str(report.page_count),
        },
    )


@router.post("/historial/layout")
def historial_layout(payload: HistorialPayload, request: Request) -> dict[str, Any]:
    """Compose without returning the PDF; report where every section landed."""
    report = _formatter(request).compose(payload.to_aggregate())
    return {
        "cod_historial": payload.cod_historial,
        "page_count": report.page_count,
        "sections": [
            {
                "key": s.key,
                "title": s.title,
                "first_page": s.first_page + 1,
                "last_page": s.last_page + 1,
                "start_offset": round(s.start_offset, 2),
                "end_offset": round(s.end_offset, 2),
            }
            for s in report.sections
        ],
    }
