"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - "Not found" inside the query engine is a None result, never an exception

Design Decisions:
    - Single hierarchy with CatalogError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Fetch failures are raised by infrastructure and propagate through core/services unchanged
      (ADR: retry policy belongs to the caller, never to the cache)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_SOURCE = "external_source"
    INTEGRITY = "integrity"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cache_key: str | None = None
    project_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all project catalog errors."""

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
                    "cache_key": self.context.cache_key,
                    "project_id": self.context.project_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidQueryError(CatalogError):
    """Query names an attribute that projects do not have."""
    def __init__(self, unknown: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Unknown project attribute(s) in query: {', '.join(unknown)}",
            "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.unknown = unknown


class ResourceNotFoundError(CatalogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CatalogSourceError(CatalogError):
    """Project catalog source could not be read or parsed."""
    def __init__(self, message: str, source: str, context: ErrorContext | None = None):
        super().__init__(
            f"Catalog source '{source}' failed: {message}",
            "CATALOG_SOURCE_ERROR", ErrorCategory.EXTERNAL_SOURCE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.source = source


class CatalogIntegrityError(CatalogError):
    """Catalog contains duplicate identities."""
    def __init__(self, field_name: str, values: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Duplicate project {field_name}(s): {', '.join(values)}",
            "CATALOG_INTEGRITY_ERROR", ErrorCategory.INTEGRITY,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.field_name = field_name
        self.values = values


class DatabaseError(CatalogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
