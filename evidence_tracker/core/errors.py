"""
Error taxonomy for the evidence service and the handlers that render it.

Every error reaches the caller as `{"error": "<message>"}`. Persistence
details are logged, never returned.
"""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = structlog.get_logger()


class EvidenceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(EvidenceError):
    """Required input is missing; nothing was written."""

    status_code = 400

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = fields or []

    def to_body(self) -> dict:
        body = super().to_body()
        if self.fields:
            body["fields"] = self.fields
        return body


class NotFoundError(EvidenceError):
    """The identifier does not resolve to a record."""

    status_code = 404


class PersistenceError(EvidenceError):
    """The store failed. The message is generic and safe to return."""

    status_code = 500


async def _evidence_error_handler(request: Request, exc: EvidenceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = []
    for err in exc.errors():
        # loc is ("body", "level") for body fields
        loc = [str(part) for part in err.get("loc", ())[1:]]
        if loc:
            fields.append(".".join(loc))
    log.info("request.invalid", path=request.url.path, fields=fields)
    body: dict = {"error": "Invalid request body"}
    if fields:
        body["fields"] = fields
    return JSONResponse(status_code=400, content=body)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("request.unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EvidenceError, _evidence_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
