"""Linting engine integration for actionlint-mcp."""

from actionlint_mcp.engine.actionlint import (
    ActionlintEngine,
    EngineError,
    LintEngine,
    RawDiagnostic,
    parse_output,
    resolve_config_file,
)

__all__ = [
    "ActionlintEngine",
    "EngineError",
    "LintEngine",
    "RawDiagnostic",
    "parse_output",
    "resolve_config_file",
]
