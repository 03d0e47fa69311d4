"""Error Hierarchy — typed, categorized exceptions for every Stockroom failure mode.

Invariants:
    - Every error class declares code, category, severity and http_status
    - 4xx errors are the caller's fault and recoverable; StoreError is critical
    - to_response() produces the REST envelope used by every error response
    - User-facing messages never contain driver text, hashes or token contents
    - Unknown login and wrong password raise the SAME InvalidCredentialsError

Design Decisions:
    - Status metadata as class attributes: each subclass only says what differs
      and builds its message; the global handler reads the attributes
    - Duplicate SKU/login are CONFLICT category but answer 400 (existing client contract)
    - ErrorContext as dataclass: resource id and field travel with the error
      without coupling to the logging setup
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the error happened: which resource, which input field."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    field: str | None = None


class StockroomError(Exception):
    """Base for all Stockroom errors. Subclasses override the class attributes."""

    code: str = "INTERNAL_ERROR"
    category: ErrorCategory = ErrorCategory.INTERNAL
    severity: ErrorSeverity = ErrorSeverity.ERROR
    http_status: int = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """REST envelope: {"error": {...}}."""
        ctx = self.context
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": ctx.timestamp.isoformat(),
                "context": {"resource_id": ctx.resource_id, "field": ctx.field},
            }
        }


def _with(context: ErrorContext | None, **values) -> ErrorContext:
    ctx = context or ErrorContext()
    for name, value in values.items():
        setattr(ctx, name, value)
    return ctx


# ─── Input (400) ────────────────────────────────────────────────

class BadRequestError(StockroomError):
    """Missing or malformed request input."""
    code = "BAD_REQUEST"
    category = ErrorCategory.VALIDATION
    http_status = 400


class InvalidInputError(StockroomError):
    """A field value breaks a domain rule (negative stock, empty sku)."""
    code = "INVALID_INPUT"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, _with(context, field=field))
        self.field = field


class InsufficientStockError(StockroomError):
    """Delta would take stock below zero; the record was not touched."""
    code = "INSUFFICIENT_STOCK"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 400

    def __init__(self, product_id: int, context: ErrorContext | None = None):
        super().__init__(
            "Insufficient stock", _with(context, resource_id=str(product_id)),
        )
        self.product_id = product_id


class DuplicateSkuError(StockroomError):
    code = "DUPLICATE_SKU"
    category = ErrorCategory.CONFLICT
    http_status = 400

    def __init__(self, sku: str, context: ErrorContext | None = None):
        super().__init__(f"SKU '{sku}' already exists", context)
        self.sku = sku


class DuplicateLoginError(StockroomError):
    code = "DUPLICATE_LOGIN"
    category = ErrorCategory.CONFLICT
    http_status = 400

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("This login is already registered", context)


# ─── Auth (401 / 403) ───────────────────────────────────────────

class UnauthenticatedError(StockroomError):
    """Token missing, malformed, tampered or expired; one message for all."""
    code = "UNAUTHENTICATED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Missing or invalid token", context)


class InvalidCredentialsError(StockroomError):
    """Login failed. Never says whether the login exists."""
    code = "INVALID_CREDENTIALS"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invalid credentials", context)


class ForbiddenError(StockroomError):
    code = "FORBIDDEN"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(self, required_role: str, context: ErrorContext | None = None):
        if required_role == "admin":
            message = "Access denied. Administrators only."
        else:
            message = f"Access denied. Requires role '{required_role}'."
        super().__init__(message, context)
        self.required_role = required_role


# ─── Lookup (404) ───────────────────────────────────────────────

class NotFoundError(StockroomError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            _with(context, resource_id=resource_id),
        )
        self.resource_type = resource_type


# ─── Contention & storage (409 / 500) ───────────────────────────

class ConcurrencyError(StockroomError):
    """Compare-and-set kept losing to concurrent writers."""
    code = "CONCURRENCY_CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409


class StoreError(StockroomError):
    """Storage failed. The diagnostic is in the logs, not the message."""
    code = "STORE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 500

    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__("An internal storage error occurred", context)
        self.operation = operation
