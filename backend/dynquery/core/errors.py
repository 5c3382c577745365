"""Error Hierarchy - typed, categorized exceptions for all DynQuery failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - The predicate fold raises none of these itself: errors come from leaf builders
      or from the shell and propagate through the fold unchanged

Design Decisions:
    - Single hierarchy with DynQueryError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field_key: str | None = None
    operator: str | None = None
    condition_index: int | None = None
    user_message: str | None = None


class DynQueryError(Exception):
    """Base exception for all DynQuery errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field_key,
                    "operator": self.context.operator,
                    "condition_index": self.context.condition_index,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnknownFieldError(DynQueryError):
    """Condition names a field that is not registered as searchable."""
    def __init__(self, field_key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_key = field_key
        super().__init__(
            f"Unknown field '{field_key}'",
            "UNKNOWN_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_key = field_key


class UnsupportedOperatorError(DynQueryError):
    """Leaf builder received an operator it cannot translate."""
    def __init__(self, operator: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operator = operator
        super().__init__(
            f"Unsupported filter operator '{operator}'",
            "UNSUPPORTED_OPERATOR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.operator = operator


class TooManyConditionsError(DynQueryError):
    """Search carries more conditions than the configured ceiling."""
    def __init__(self, count: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Search has {count} conditions, maximum is {limit}",
            "TOO_MANY_CONDITIONS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.count = count
        self.limit = limit


class ResourceNotFoundError(DynQueryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DuplicateCustomerError(DynQueryError):
    """Customer code already taken."""
    def __init__(self, code: str, context: ErrorContext | None = None):
        super().__init__(
            f"Customer code '{code}' already exists",
            "DUPLICATE_CUSTOMER", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.customer_code = code


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DynQueryError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
