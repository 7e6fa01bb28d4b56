"""Error Hierarchy — typed, categorized exceptions for every request failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; store failures (500-level) are critical
    - to_response() produces the REST envelope {"error": "<message>"}
    - StoreFailureError carries only a public message: driver detail stays in logs

Design Decisions:
    - Single hierarchy with LibraryError base: one FastAPI handler maps all of them
    - http_status lives on the error, so routes never pick status codes themselves
"""

from enum import Enum


GENERIC_STORE_FAILURE = "Server error"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"


class LibraryError(Exception):
    """Base exception for all library API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(LibraryError):
    """Request carried a value the router refuses to pass to the store."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class NotFoundError(LibraryError):
    """Referenced entity id does not exist."""
    def __init__(self, resource_type: str, resource_id: int | str | None = None):
        super().__init__(
            f"{resource_type} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConcurrencyError(LibraryError):
    """Row changed between the snapshot read and the guarded write."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreFailureError(LibraryError):
    """Any data-access failure: connectivity, constraint, procedure-raised."""
    def __init__(self, message: str = GENERIC_STORE_FAILURE, operation: str = "query"):
        super().__init__(
            message, "STORE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
