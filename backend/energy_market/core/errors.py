"""Error Hierarchy — typed, categorized exceptions for all market failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule errors (4xx) are recoverable; infrastructure errors (5xx) are critical
    - to_response() produces the REST envelope
    - A raised error means the store was left unchanged

Design Decisions:
    - Single hierarchy with EnergyMarketError base: FastAPI global handler catches all
    - ErrorContext as dataclass: carries the offending ids/field without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    producer_id: str | None = None
    consumer_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class EnergyMarketError(Exception):
    """Base exception for all energy market errors."""

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
                    "producer_id": self.context.producer_id,
                    "consumer_id": self.context.consumer_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(EnergyMarketError):
    """Create/update argument is malformed or out of range."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class RecordNotFoundError(EnergyMarketError):
    """Referenced producer, consumer or transaction does not exist."""
    def __init__(
        self, record_type: str, record_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{record_type} '{record_id}' not found",
            "RECORD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.record_type = record_type
        self.record_id = record_id


class InsufficientEnergyError(EnergyMarketError):
    """Producer cannot cover the consumer's energy need."""
    def __init__(
        self, requested: int, available: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Insufficient energy: requested {requested} kWh, available {available} kWh",
            "INSUFFICIENT_ENERGY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 422,
        )
        self.requested = requested
        self.available = available


class InsufficientBudgetError(EnergyMarketError):
    """Consumer budget does not cover the trade at the producer's current price."""
    def __init__(
        self, total_price: int, budget: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Insufficient budget: trade costs {total_price}, budget is {budget}",
            "INSUFFICIENT_BUDGET", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 422,
        )
        self.total_price = total_price
        self.budget = budget


class NoMatchError(EnergyMarketError):
    """No producer satisfies the consumer's need within its budget."""
    def __init__(self, consumer_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.consumer_id = consumer_id
        super().__init__(
            f"No producer can serve consumer '{consumer_id}'",
            "NO_MATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 422,
        )


class InvariantViolationError(EnergyMarketError):
    """Update would break a structural invariant of a record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVARIANT_VIOLATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(EnergyMarketError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
