"""Error Hierarchy: typed, categorized exceptions for every Bookshelf failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller errors are 400-level and recoverable; storage errors are 500-level
    - to_response() produces the single REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy rooted at BookshelfError: one FastAPI handler catches all
    - Not-found stays a sentinel inside the repository; ResourceNotFoundError is
      raised only at the handler boundary
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    book_id: str | None = None
    field_name: str | None = None


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.field_name is not None:
            body["field"] = self.context.field_name
        return {"error": body}


# ─── Caller Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(BookshelfError):
    """Caller-supplied data violates a field rule or the mutable allow-list."""
    def __init__(
        self, message: str, field_name: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_name = field_name


class MissingCredentialError(BookshelfError):
    """Credential absent, malformed, unknown, or its lookup failed."""
    def __init__(
        self, message: str = "API key is missing",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "MISSING_CREDENTIAL", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedError(BookshelfError):
    """Credential present and known but not valid."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "API key is not valid", "UNAUTHORIZED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(BookshelfError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.book_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(BookshelfError):
    """Datastore call failed for infrastructural reasons."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
