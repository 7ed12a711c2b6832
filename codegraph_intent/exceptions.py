"""
Intent Layer Exceptions

Custom exceptions for query analysis and intent resolution.
"""

from typing import Any


class IntentError(Exception):
    """Base exception for the intent layer."""

    kind = "IntentError"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.details = details or {}
        super().__init__(message)


class QueryValidationError(IntentError):
    """Request input (usually the query) is missing or invalid."""

    kind = "ValidationError"

    def __init__(self, message: str, query: str | None = None, field: str = "query"):
        self.query = query
        self.field = field
        super().__init__(message, {"field": field})


class AnalysisStructureError(IntentError):
    """Analysis passed to the resolver is malformed or incomplete."""

    kind = "StructuralError"

    def __init__(self, message: str, missing: str | None = None):
        self.missing = missing
        super().__init__(message, {"missing": missing} if missing else None)


class IntentInternalError(IntentError):
    """Unexpected fault during scoring or explanation."""

    kind = "InternalError"
