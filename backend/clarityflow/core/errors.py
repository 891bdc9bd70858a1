"""Error Hierarchy — typed, categorized exceptions for all ClarityFlow failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries a details dict with enough structure to build a retry
    - Domain errors (400-level) are scoped to one operation on one card
    - to_response() produces the REST envelope {"error": {code, message, details, ...}}
    - CardNotFoundError never reveals whether a card was deleted or never existed

Design Decisions:
    - Single hierarchy with ClarityFlowError base: FastAPI global handler catches all
    - All three conflict kinds share ConflictError so callers can catch 409s as one family
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to every error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    card_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ClarityFlowError(Exception):
    """Base exception for all ClarityFlow errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        details: dict[str, Any] | None = None,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.details = details or {}
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
                "details": self.details,
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CardNotFoundError(ClarityFlowError):
    """Card id does not resolve to a visible (non-deleted) card."""
    def __init__(self, card_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.card_id = str(card_id)
        super().__init__(
            "Card not found", "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, {}, ctx, 404,
        )


class CardValidationError(ClarityFlowError):
    """Input shape or value rejected before business rules run."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, {"field": field}, context, 400,
        )
        self.field = field


class ConflictError(ClarityFlowError):
    """Request is well-formed but conflicts with the card's current state."""
    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, details, context, 409,
        )


class StateMachineViolation(ConflictError):
    """Requested status is not a legal edge from the current status."""
    def __init__(
        self,
        current_status: str,
        requested_status: str,
        allowed_transitions: list[str],
        context: ErrorContext | None = None,
    ):
        allowed = ", ".join(allowed_transitions) or "none"
        super().__init__(
            f"Invalid state transition from {current_status} to {requested_status}. "
            f"Allowed transitions from {current_status}: {allowed}",
            "INVALID_TRANSITION",
            {
                "currentStatus": current_status,
                "requestedStatus": requested_status,
                "allowedTransitions": list(allowed_transitions),
            },
            context,
        )
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed_transitions = list(allowed_transitions)


class IncompletenessViolation(ConflictError):
    """Transition or update blocked because core fields are (or would become) blank."""
    def __init__(
        self,
        missing_fields: list[str],
        summary: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Card is incomplete: {', '.join(missing_fields)} must not be empty. {summary}",
            "INCOMPLETE_CARD",
            {"missingFields": list(missing_fields), "summary": summary},
            context,
        )
        self.missing_fields = list(missing_fields)
        self.summary = summary


class VersionConflict(ConflictError):
    """Supplied version is stale: another writer already advanced the card."""
    def __init__(
        self,
        current_version: int,
        provided_version: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Version mismatch. Expected {current_version}, got {provided_version}",
            "VERSION_CONFLICT",
            {
                "currentVersion": current_version,
                "providedVersion": provided_version,
            },
            context,
        )
        self.current_version = current_version
        self.provided_version = provided_version


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ClarityFlowError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, {"operation": operation}, context, 503,
        )
        self.operation = operation
