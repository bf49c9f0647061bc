"""FastMCP server exposing actionlint workflow validation as MCP tools.

Run via::

    actionlint-mcp                       # reads .env (default: stdio)
    MCP_TRANSPORT=http actionlint-mcp    # streamable HTTP on port 9000
    MCP_TRANSPORT=sse  actionlint-mcp    # legacy SSE on port 9000

The linting engine is the ``actionlint`` executable.  Optional shellcheck and
pyflakes integrations are enabled with ``SHELLCHECK_COMMAND`` and
``PYFLAKES_COMMAND``.  Settings are loaded from environment variables and
``.env`` file; see ``.env.example`` for available options.
"""

from __future__ import annotations

import json
import logging

import anyio.to_thread
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from actionlint_mcp import __version__
from actionlint_mcp.engine.actionlint import ActionlintEngine, resolve_config_file
from actionlint_mcp.models.diagnostics import (
    DEFAULT_SEVERITY,
    SEVERITY_BY_KIND,
    EmptyDirectory,
    Severity,
    ValidationRequest,
)
from actionlint_mcp.models.errors import RequestError
from actionlint_mcp.service.aggregator import DirectoryAggregator
from actionlint_mcp.service.validator import WorkflowValidator
from actionlint_mcp.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("actionlint_mcp.mcp")

mcp = FastMCP("actionlint-mcp")
_validator: WorkflowValidator | None = None
_aggregator: DirectoryAggregator | None = None
_default_directory: str = ".github/workflows"
_check_timeout: float | None = None


def init_services(settings: Settings) -> None:
    """Build the engine, validator and aggregator from *settings*."""
    global _validator, _aggregator, _default_directory, _check_timeout  # noqa: PLW0603
    engine = ActionlintEngine(
        settings.actionlint_command,
        shellcheck=settings.shellcheck_command,
        pyflakes=settings.pyflakes_command,
        config_file=resolve_config_file(settings.actionlint_config_file),
        timeout=settings.lint_timeout_seconds,
    )
    _validator = WorkflowValidator(engine)
    _aggregator = DirectoryAggregator(_validator, max_workers=settings.max_workers)
    _default_directory = settings.default_workflow_directory
    _check_timeout = settings.check_timeout_seconds


def reset_services() -> None:
    """Clear the shared services (for tests)."""
    global _validator, _aggregator, _default_directory, _check_timeout  # noqa: PLW0603
    _validator = None
    _aggregator = None
    _default_directory = ".github/workflows"
    _check_timeout = None


def _require_validator() -> WorkflowValidator:
    if _validator is None:
        raise ToolError("Validator not initialised")
    return _validator


def _require_aggregator() -> DirectoryAggregator:
    if _aggregator is None:
        raise ToolError("Aggregator not initialised")
    return _aggregator


def _to_json(result: BaseModel) -> str:
    try:
        return result.model_dump_json(indent=2)
    except PydanticSerializationError as exc:
        error = RequestError.serialization_failure(str(exc))
        raise ToolError(error.message) from exc


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def _lint(file_path: str | None, content: str | None) -> str:
    validator = _require_validator()
    outcome = validator.validate(ValidationRequest(path=file_path, content=content))
    if isinstance(outcome, RequestError):
        logger.warning("lint_workflow failed: %s", outcome.message)
        raise ToolError(outcome.message)
    return _to_json(outcome)


def _check(directory: str) -> str:
    aggregator = _require_aggregator()
    outcome = aggregator.aggregate(directory, timeout=_check_timeout)
    if isinstance(outcome, EmptyDirectory):
        return outcome.message
    return _to_json(outcome)


# Tool bodies block on the actionlint subprocess, so they run on a worker
# thread and leave the event loop free for other calls.


@mcp.tool
async def lint_workflow(file_path: str | None = None, content: str | None = None) -> str:
    """Lint a GitHub Actions workflow file using actionlint.

    Provide either ``file_path`` or ``content``.  If both are given the file
    is read and ``content`` is ignored.

    Returns JSON::

        {"errors": [{"message", "line", "column", "kind", "severity"}],
         "valid": true|false, "file_path": "..."}

    ``severity`` is ``error`` for syntax/type problems, ``warning`` for
    shellcheck/pyflakes findings and ``info`` for everything else.

    Args:
        file_path: Path to the workflow file to lint.
        content: Content of the workflow file to lint (if file_path is not provided).
    """
    logger.info(
        "lint_workflow called (file_path=%s, content length=%d)",
        file_path,
        len(content or ""),
    )
    return await anyio.to_thread.run_sync(_lint, file_path, content)


@mcp.tool
async def check_all_workflows(directory: str | None = None) -> str:
    """Check all GitHub Actions workflow files in a directory.

    Lints every ``*.yml`` and ``*.yaml`` file directly inside the directory
    (subdirectories are not searched).  A file that cannot be read or linted
    is reported as invalid with a single error instead of failing the call.

    Returns JSON::

        {"total_files": N, "files_with_errors": N, "total_errors": N,
         "results": {"<path>": <lint_workflow result>}}

    or a plain-text notice when no workflow files are found.

    When the server is configured with ``CHECK_TIMEOUT_SECONDS`` and the
    deadline passes, files still being linted are left out of ``results``
    and ``total_files`` counts only the files that finished.

    Args:
        directory: Directory to search for workflow files (defaults to .github/workflows).
    """
    directory = directory or _default_directory
    logger.info("check_all_workflows called (directory=%s)", directory)
    return await anyio.to_thread.run_sync(_check, directory)


# ---------------------------------------------------------------------------
# Resources + prompts
# ---------------------------------------------------------------------------


def _kinds_for(severity: Severity) -> list[str]:
    return sorted(kind for kind, tier in SEVERITY_BY_KIND.items() if tier == severity)


@mcp.resource("actionlint://severity-map")
def severity_map() -> str:
    """How actionlint error kinds map to severity tiers."""
    return json.dumps(
        {"kinds": dict(sorted(SEVERITY_BY_KIND.items())), "default": DEFAULT_SEVERITY},
        indent=2,
    )


@mcp.prompt
def fix_workflow_diagnostics() -> str:
    """How to read lint_workflow results and fix the reported problems."""
    return f"""\
# Fixing GitHub Actions workflow diagnostics

Each entry in `errors` has a `kind` assigned by actionlint and a derived
`severity`:

- `error`: {", ".join(_kinds_for(Severity.ERROR))}
  The workflow is malformed and will not run.  Fix these first.
- `warning`: {", ".join(_kinds_for(Severity.WARNING))}
  Findings from the shell / Python checkers in `run:` scripts.
- `info`: every other kind ({", ".join(_kinds_for(Severity.INFO))}, and any
  kind not listed here).  Rule violations that usually still deserve a fix.

`line` and `column` are 1-based positions in the workflow file.

## Workflow

1. `check_all_workflows()` to find every workflow with problems.
2. `lint_workflow(file_path=...)` on one file to see its diagnostics.
3. Edit the file, then `lint_workflow(content=...)` on the draft until
   `valid` is `true`.
4. Write the fixed file and re-run `check_all_workflows()`.
"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the MCP server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "actionlint MCP Server v%s starting (transport=%s)",
        __version__,
        settings.mcp_transport,
    )

    init_services(settings)

    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(
            transport=settings.mcp_transport,
            host=settings.mcp_server_host,
            port=settings.mcp_server_port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
