"""Error Hierarchy — typed, categorized exceptions for all invoicing failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": ..., "code": ...}
    - No internal details leaked in user-facing messages (public_message vs message)

Design Decisions:
    - Single hierarchy with InvoicingError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Ownership mismatch has no error of its own: it is indistinguishable from
      "does not exist" and surfaces as ResourceNotFoundError or a smaller result
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    owner_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class InvoicingError(Exception):
    """Base exception for all invoicing errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        public_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.public_message = public_message or message

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.public_message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(InvoicingError):
    """No valid owner identity on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InputValidationError(InvoicingError):
    """Request passed structural parsing but violates a domain rule."""
    def __init__(
        self,
        message: str,
        field: str,
        error_type: str = "value_error",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            public_message="Invalid input",
        )
        self.field = field
        self.error_type = error_type

    @property
    def details(self) -> list[dict]:
        return [
            {"field": self.field, "message": self.message, "type": self.error_type},
        ]

    def to_response(self) -> dict:
        return {
            "error": self.public_message,
            "code": self.code,
            "details": self.details,
        }


class ResourceNotFoundError(InvoicingError):
    """Requested resource does not exist or is not owned by the caller."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
            public_message=f"{resource_type} not found",
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DataAccessError(InvoicingError):
    """Storage collaborator failed. Detail stays in logs."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATA_ACCESS_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
            public_message="Internal server error",
        )
        self.operation = operation
