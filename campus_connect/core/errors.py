"""Error Hierarchy — typed, categorized exceptions for Campus Connect failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - recoverable means: severity below ERROR, or a retry hint (retry_after_ms) is set
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages
    - Affiliation outcomes (not found, malformed email) are values, NOT exceptions
      (see core/affiliation.py) — only the shell raises AffiliationLookupError

Design Decisions:
    - Single hierarchy with CampusConnectError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_LOOKUP = "external_lookup"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    post_id: str | None = None
    college_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class CampusConnectError(Exception):
    """Base exception for all Campus Connect errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING) or (
            self.context.retry_after_ms is not None
        )

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
                    "user_id": self.context.user_id,
                    "post_id": self.context.post_id,
                    "college_id": self.context.college_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class PostValidationError(CampusConnectError):
    """Post payload breaks a per-type content rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "POST_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class UnauthenticatedError(CampusConnectError):
    """Request carries no usable identity from the auth provider."""
    def __init__(self, reason: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(
            reason, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class NotAffiliatedError(CampusConnectError):
    """User has no college affiliation and cannot post."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You must be logged in and verified to post",
            "NOT_AFFILIATED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 403,
        )


class ResourceNotFoundError(CampusConnectError):
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
        self.resource_id = resource_id


class InvalidTransitionError(CampusConnectError):
    """Like toggle moved through an illegal state transition."""
    def __init__(self, current: str, attempted: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot {attempted} a like toggle in state '{current}'",
            "INVALID_TRANSITION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.current = current
        self.attempted = attempted


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CampusConnectError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class AffiliationLookupError(CampusConnectError):
    """Institution store could not be consulted — caller may retry."""
    def __init__(
        self,
        domain: str,
        reason: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms if retry_after_ms is not None else 1000
        ctx.user_message = ctx.user_message or (
            "We could not check your college right now. Please try again."
        )
        super().__init__(
            f"Institution lookup for '{domain}' failed: {reason}",
            "AFFILIATION_LOOKUP_FAILED", ErrorCategory.EXTERNAL_LOOKUP,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.domain = domain
