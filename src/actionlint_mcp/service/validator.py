"""Single-document validation: core service layer reusable by every transport."""

from __future__ import annotations

import logging
from pathlib import Path

from actionlint_mcp.engine.actionlint import EngineError, LintEngine, RawDiagnostic
from actionlint_mcp.models.diagnostics import (
    INLINE_FILENAME,
    SEVERITY_BY_KIND,
    Diagnostic,
    ValidationRequest,
    ValidationResult,
    severity_for,
)
from actionlint_mcp.models.errors import RequestError

logger = logging.getLogger("actionlint_mcp.validator")


def normalize(raw: RawDiagnostic) -> Diagnostic:
    """Attach a severity tier to an engine finding."""
    if raw.kind not in SEVERITY_BY_KIND:
        logger.debug("Unmapped diagnostic kind %r, defaulting severity", raw.kind)
    return Diagnostic(
        message=raw.message,
        line=raw.line,
        column=raw.column,
        kind=raw.kind,
        severity=severity_for(raw.kind),
    )


class WorkflowValidator:
    """Validates one workflow document through a :class:`LintEngine`.

    Failures are returned as :class:`RequestError` values instead of being
    raised, so callers can branch on the outcome type.  The validator holds
    no per-call state and may be shared across threads.
    """

    def __init__(self, engine: LintEngine) -> None:
        self._engine = engine

    def validate(self, request: ValidationRequest) -> ValidationResult | RequestError:
        if request.path:
            file_path = request.path
            try:
                content = Path(file_path).read_bytes()
            except OSError as exc:
                return RequestError.file_unreadable(file_path, str(exc))
        elif request.content:
            file_path = INLINE_FILENAME
            content = request.content.encode("utf-8")
        else:
            return RequestError.missing_input()

        try:
            raw = self._engine.lint(file_path, content)
        except EngineError as exc:
            return RequestError.engine_failure(str(exc), path=file_path)

        return ValidationResult.from_diagnostics(file_path, [normalize(r) for r in raw])

    def validate_path(self, path: str) -> ValidationResult | RequestError:
        return self.validate(ValidationRequest(path=path))

    def validate_content(self, content: str) -> ValidationResult | RequestError:
        return self.validate(ValidationRequest(content=content))
