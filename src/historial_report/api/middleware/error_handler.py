"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from historial_report.exceptions import (
    HistorialReportError,
    MissingAggregateError,
    RenderOverflowImpossible,
    SchemaError,
)

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(MissingAggregateError)
    async def handle_missing(request: Request, exc: MissingAggregateError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "missing_aggregate"})

    @app.exception_handler(SchemaError)
    async def handle_schema(request: Request, exc: SchemaError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "schema_error"})

    @app.exception_handler(RenderOverflowImpossible)
    async def handle_overflow(request: Request, exc: RenderOverflowImpossible) -> JSONResponse:
        log.warning("Report aborted: %s", exc)
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "type": "render_overflow", "section": exc.section},
        )

    @app.exception_handler(HistorialReportError)
    async def handle_generic_error(request: Request, exc: HistorialReportError) -> JSONResponse:
        log.error("Report failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "historial_report_error"})
