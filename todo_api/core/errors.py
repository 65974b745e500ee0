"""Error Hierarchy — typed, categorized exceptions for every Todo API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - UnauthorizedError and TodoNotFoundError carry fixed messages: the payload never
      reveals which check failed or whether a record exists for someone else
    - Messages never contain plaintext passwords or raw tokens

Design Decisions:
    - Single hierarchy with TodoApiError base: one FastAPI handler catches all
    - Token errors are internal to the token service and are converted to
      UnauthorizedError before they leave the core
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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """When the error was raised; stamped into every error payload."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class TodoApiError(Exception):
    """Base exception for all Todo API errors."""

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


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(TodoApiError):
    """Malformed or missing required input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        return response


class InvalidEmailFormatError(InputValidationError):
    """Email does not have a valid shape."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("email is not a valid email address", "email", context)


class WeakPasswordError(InputValidationError):
    """Password shorter than the configured policy minimum."""
    def __init__(self, min_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"password must be at least {min_length} characters", "password", context,
        )
        self.min_length = min_length


class DuplicateEmailError(TodoApiError):
    """Signup with an email that already belongs to a user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "email is already registered",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class UnauthorizedError(TodoApiError):
    """Missing, invalid, or revoked credential. Always the same payload."""
    MESSAGE = "Authentication required"

    def __init__(self, context: ErrorContext | None = None, message: str | None = None):
        super().__init__(
            message or self.MESSAGE,
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(UnauthorizedError):
    """Login with an unknown email or a wrong password."""
    MESSAGE = "Invalid email or password"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(context, self.MESSAGE)


class TodoNotFoundError(TodoApiError):
    """Todo absent, malformed id, or owned by someone else. Indistinguishable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Todo not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Token Errors (internal to the token service) ───────────────

class TokenError(Exception):
    """Token failed cryptographic verification."""


class TokenMalformedError(TokenError):
    """Token cannot be decoded or lacks the required claims."""


class TokenSignatureError(TokenError):
    """Token signature does not match its payload."""


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TodoApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
