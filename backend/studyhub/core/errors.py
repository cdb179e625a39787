"""Error Hierarchy — typed, categorized exceptions for all StudyHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Precondition errors (400-level) are raised before any side effect
    - Infrastructure errors (500-level) never carry internal details in the message
    - to_response() produces the REST envelope; context is for logs only

Design Decisions:
    - Single hierarchy with StudyHubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs; never sent to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stage: str | None = None


class StudyHubError(Exception):
    """Base exception for all StudyHub errors."""

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
            }
        }


# ─── Precondition Errors (400-level) ────────────────────────────

class UnauthenticatedError(StudyHubError):
    """No identity was supplied by the identity service."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthenticated.", "UNAUTHENTICATED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class MissingFileError(StudyHubError):
    """Upload request carried no file payload."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No PDF file uploaded", "MISSING_FILE",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class MissingParameterError(StudyHubError):
    """A required request parameter is absent or blank."""
    def __init__(self, parameter: str, context: ErrorContext | None = None):
        super().__init__(
            f"{parameter.capitalize()} parameter is required",
            "MISSING_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.parameter = parameter


class ResourceNotFoundError(StudyHubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalFailureError(StudyHubError):
    """Unexpected failure inside a side-effecting stage."""
    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(InternalFailureError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation


class BlobStoreError(InternalFailureError):
    """Blob storage operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Blob {operation} failed: {message}",
            "BLOB_STORE_ERROR", ErrorCategory.STORAGE, context,
        )
        self.operation = operation
