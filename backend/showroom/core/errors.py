"""Error Hierarchy: typed, categorized exceptions for all Showroom failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST error envelope used by every handler

Design Decisions:
    - Single hierarchy with ShowroomError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    REQUEST = "request"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where an error happened, for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    collection: str | None = None
    operation: str | None = None
    document_key: str | None = None


class ShowroomError(Exception):
    """Base exception for all Showroom errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "collection": self.context.collection,
                    "operation": self.context.operation,
                    "document_key": self.context.document_key,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class DocumentValidationError(ShowroomError):
    """A document would violate schema rules once written."""
    def __init__(
        self, message: str, details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class DuplicateKeyConflictError(ShowroomError):
    """Insert collided with a unique index."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class PayloadTooLargeError(ShowroomError):
    """Request body exceeded the configured limit."""
    def __init__(self, max_bytes: int, context: ErrorContext | None = None):
        super().__init__(
            f"Request body exceeds {max_bytes} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.REQUEST,
            ErrorSeverity.WARNING, context, 413,
        )
        self.max_bytes = max_bytes


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ShowroomError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class ConfigurationError(ShowroomError):
    """Startup configuration is missing or invalid."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


def format_validation_details(errors: list[dict]) -> list[dict]:
    """Flatten Pydantic error dicts into the envelope's `details` list."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
