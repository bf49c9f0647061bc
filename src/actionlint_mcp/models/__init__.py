"""Pydantic result models for actionlint-mcp."""

from actionlint_mcp.models.diagnostics import (
    DEFAULT_SEVERITY,
    INLINE_FILENAME,
    SEVERITY_BY_KIND,
    Diagnostic,
    DirectorySummary,
    EmptyDirectory,
    Severity,
    ValidationRequest,
    ValidationResult,
    severity_for,
)
from actionlint_mcp.models.errors import MISSING_INPUT_MESSAGE, RequestError, RequestErrorKind

__all__ = [
    "DEFAULT_SEVERITY",
    "INLINE_FILENAME",
    "MISSING_INPUT_MESSAGE",
    "SEVERITY_BY_KIND",
    "Diagnostic",
    "DirectorySummary",
    "EmptyDirectory",
    "RequestError",
    "RequestErrorKind",
    "Severity",
    "ValidationRequest",
    "ValidationResult",
    "severity_for",
]
