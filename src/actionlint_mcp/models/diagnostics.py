"""Structured lint results shared by the validator, the aggregator and the MCP tools."""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

INLINE_FILENAME = "inline.yml"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# Every actionlint kind maps to a tier.  Kinds missing from this table are
# not dropped; ``severity_for`` falls back to ``DEFAULT_SEVERITY``.
SEVERITY_BY_KIND: dict[str, Severity] = {
    # Structural / type violations
    "syntax-check": Severity.ERROR,
    "type-check": Severity.ERROR,
    # External static-analysis findings
    "shellcheck": Severity.WARNING,
    "pyflakes": Severity.WARNING,
    # Remaining actionlint rules
    "action": Severity.INFO,
    "credentials": Severity.INFO,
    "deprecated-commands": Severity.INFO,
    "env-var": Severity.INFO,
    "events": Severity.INFO,
    "expression": Severity.INFO,
    "glob": Severity.INFO,
    "id": Severity.INFO,
    "if-cond": Severity.INFO,
    "job-needs": Severity.INFO,
    "matrix": Severity.INFO,
    "permissions": Severity.INFO,
    "runner-label": Severity.INFO,
    "workflow-call": Severity.INFO,
}

DEFAULT_SEVERITY = Severity.INFO


def severity_for(kind: str) -> Severity:
    """Return the severity tier for an engine diagnostic kind."""
    return SEVERITY_BY_KIND.get(kind, DEFAULT_SEVERITY)


class ValidationRequest(BaseModel):
    """Input for a single-document validation: a file path or inline content.

    Empty strings count as absent.  When both are given, the path wins.
    """

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    content: str | None = None


class Diagnostic(BaseModel):
    """One issue reported about a workflow document."""

    model_config = ConfigDict(frozen=True)

    message: str
    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)
    kind: str = ""
    severity: Severity = DEFAULT_SEVERITY


class ValidationResult(BaseModel):
    """Outcome of validating one document.

    ``errors`` keeps the engine's emission order.  ``valid`` is always derived
    from it, never taken from the engine.
    """

    errors: list[Diagnostic] = []
    valid: bool = True
    file_path: str

    @model_validator(mode="after")
    def _check_valid(self) -> Self:
        if self.valid != (not self.errors):
            raise ValueError("valid must be true exactly when errors is empty")
        return self

    @classmethod
    def from_diagnostics(cls, file_path: str, diagnostics: list[Diagnostic]) -> ValidationResult:
        return cls(errors=list(diagnostics), valid=not diagnostics, file_path=file_path)

    @classmethod
    def lint_failure(cls, file_path: str, reason: str) -> ValidationResult:
        """Synthetic result for a document whose validation could not run."""
        diagnostic = Diagnostic(
            message=f"Failed to lint: {reason}",
            kind="lint-failure",
            severity=Severity.ERROR,
        )
        return cls(errors=[diagnostic], valid=False, file_path=file_path)


class DirectorySummary(BaseModel):
    """Aggregate outcome of validating every workflow in a directory."""

    total_files: int = Field(ge=0)
    files_with_errors: int = Field(ge=0)
    total_errors: int = Field(ge=0)
    results: dict[str, ValidationResult] = {}

    @model_validator(mode="after")
    def _check_counts(self) -> Self:
        invalid = sum(1 for r in self.results.values() if not r.valid)
        errors = sum(len(r.errors) for r in self.results.values())
        if self.total_files != len(self.results):
            raise ValueError(
                f"total_files={self.total_files} but {len(self.results)} results present"
            )
        if self.files_with_errors != invalid:
            raise ValueError(
                f"files_with_errors={self.files_with_errors} but {invalid} results are invalid"
            )
        if self.total_errors != errors:
            raise ValueError(f"total_errors={self.total_errors} but results hold {errors}")
        return self

    @classmethod
    def from_results(cls, results: dict[str, ValidationResult]) -> DirectorySummary:
        """Fold per-document results into a summary with consistent counts."""
        return cls(
            total_files=len(results),
            files_with_errors=sum(1 for r in results.values() if not r.valid),
            total_errors=sum(len(r.errors) for r in results.values()),
            results=dict(results),
        )


class EmptyDirectory(BaseModel):
    """Returned instead of a summary when no workflow files were discovered."""

    directory: str

    @property
    def message(self) -> str:
        return f"No workflow files found in {self.directory}"
