"""Adapter running the ``actionlint`` executable on a single workflow document.

The document is piped on stdin and ``-stdin-filename`` gives it a virtual
path, so inline content never touches disk.  Output is requested as JSON and
parsed into :class:`RawDiagnostic` records.  Both output streams are always
captured: anything actionlint prints must not leak onto the MCP stdio channel.
"""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger("actionlint_mcp.engine")

# actionlint exit statuses: 0 = clean, 1 = problems found,
# 2 = invalid command line, 3 = fatal error.
_EXIT_OK = 0
_EXIT_PROBLEMS = 1

_JSON_FORMAT = "{{json .}}"


class EngineError(Exception):
    """The linting engine could not run or produced unreadable output.

    Distinct from lint findings, which are returned as diagnostics.
    """


@dataclass(frozen=True)
class RawDiagnostic:
    """One finding as reported by the engine, before severity is assigned."""

    message: str
    line: int
    column: int
    kind: str


class LintEngine(Protocol):
    def lint(self, filename: str, content: bytes) -> list[RawDiagnostic]: ...


def resolve_config_file(path: str | Path | None) -> str | None:
    """Return *path* if it names an existing file, else ``None``.

    A missing config file is not an error; actionlint then runs on defaults.
    """
    if not path:
        return None
    if not Path(path).is_file():
        logger.debug("actionlint config %s not found, using defaults", path)
        return None
    return str(path)


def parse_output(stdout: str) -> list[RawDiagnostic]:
    """Parse actionlint's ``{{json .}}`` output.

    Raises :class:`EngineError` on anything but a JSON array (or ``null``).
    """
    text = stdout.strip()
    if not text or text == "null":
        return []
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EngineError(f"unparseable actionlint output: {exc}") from exc
    if not isinstance(payload, list):
        raise EngineError(f"expected a JSON array from actionlint, got {type(payload).__name__}")
    return [_to_raw(entry) for entry in payload]


def _to_raw(entry: Any) -> RawDiagnostic:
    if not isinstance(entry, dict):
        raise EngineError(f"unexpected actionlint error entry: {entry!r}")
    try:
        line = max(int(entry.get("line") or 0), 0)
        column = max(int(entry.get("column") or 0), 0)
    except (TypeError, ValueError) as exc:
        raise EngineError(f"bad position in actionlint error entry: {entry!r}") from exc
    return RawDiagnostic(
        message=str(entry.get("message", "")),
        line=line,
        column=column,
        kind=str(entry.get("kind", "")),
    )


class ActionlintEngine:
    """Runs ``actionlint`` as a subprocess.  Stateless, safe to share across threads.

    ``shellcheck`` / ``pyflakes`` name the external checkers; ``None`` or an
    empty string disables that integration.
    """

    def __init__(
        self,
        command: str = "actionlint",
        *,
        shellcheck: str | None = None,
        pyflakes: str | None = None,
        config_file: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._command = command
        self._shellcheck = shellcheck or ""
        self._pyflakes = pyflakes or ""
        self._config_file = config_file
        self._timeout = timeout

    def build_command(self, filename: str) -> list[str]:
        cmd = [
            self._command,
            "-format",
            _JSON_FORMAT,
            "-no-color",
            "-stdin-filename",
            filename,
            f"-shellcheck={self._shellcheck}",
            f"-pyflakes={self._pyflakes}",
        ]
        if self._config_file:
            cmd.extend(["-config-file", self._config_file])
        cmd.append("-")
        return cmd

    def lint(self, filename: str, content: bytes) -> list[RawDiagnostic]:
        cmd = self.build_command(filename)
        try:
            result = subprocess.run(
                cmd,
                input=content,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise EngineError(f"actionlint executable not found: {self._command}") from exc
        except subprocess.TimeoutExpired as exc:
            raise EngineError(f"actionlint timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise EngineError(f"failed to start actionlint: {exc}") from exc

        stderr = result.stderr.decode("utf-8", "replace").strip()
        if stderr:
            logger.debug("actionlint stderr for %s: %s", filename, stderr)

        if result.returncode not in (_EXIT_OK, _EXIT_PROBLEMS):
            detail = stderr or f"exit status {result.returncode}"
            raise EngineError(detail)

        return parse_output(result.stdout.decode("utf-8", "replace"))
