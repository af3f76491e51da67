"""Error Handlers — every failure leaves the API as {"error", "code"[, "details"]}.

Invariants:
    - InvoicingError → exc.http_status with exc.to_response()
    - RequestValidationError → 400 "Invalid input" with one detail per failed field
    - Anything else → 500 "Internal server error"; the exception text stays in the log

Design Decisions:
    - Field paths drop the leading "body"/"query"/"path"/"header" segment so parse
      errors and core validation errors name fields the same way ("ids", "newStatus")
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicing.core.errors import ErrorSeverity, InvoicingError

logger = logging.getLogger(__name__)

_REQUEST_PARTS = frozenset({"body", "query", "path", "header"})

INTERNAL_ERROR_BODY = {"error": "Internal server error", "code": "INTERNAL_ERROR"}


def _field_path(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def build_validation_error_response(errors) -> dict:
    return {
        "error": "Invalid input",
        "code": "VALIDATION_ERROR",
        "details": [
            {"field": _field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
            for e in errors
        ],
    }


async def _on_invoicing_error(request: Request, exc: InvoicingError):
    level = logging.ERROR if exc.severity is ErrorSeverity.CRITICAL else logging.WARNING
    logger.log(
        level,
        f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _on_request_validation(request: Request, exc: RequestValidationError):
    body = build_validation_error_response(exc.errors())
    logger.warning(
        f"Rejected request: {[d['field'] for d in body['details']]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def _on_unhandled(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvoicingError, _on_invoicing_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation)
    app.add_exception_handler(Exception, _on_unhandled)
