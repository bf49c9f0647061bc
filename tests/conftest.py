"""Shared test fixtures for actionlint-mcp."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from actionlint_mcp.engine.actionlint import EngineError, RawDiagnostic
from actionlint_mcp.service.aggregator import DirectoryAggregator
from actionlint_mcp.service.validator import WorkflowValidator

VALID_WORKFLOW = """\
name: Test
on: push
jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
"""

# Job without runs-on: rejected by actionlint as a syntax-check error.
INVALID_WORKFLOW = """\
name: Missing Required
on: push
jobs:
  test:
    steps:
      - uses: actions/checkout@v4
"""

ACTIONLINT_AVAILABLE = shutil.which("actionlint") is not None


class FakeEngine:
    """Stand-in for ``ActionlintEngine`` with canned behaviour.

    Documents containing ``runs-on`` are clean; anything else gets one
    ``syntax-check`` finding.  ``responses`` overrides that per filename and
    ``failures`` makes the engine raise for a filename.
    """

    def __init__(
        self,
        responses: dict[str, list[RawDiagnostic]] | None = None,
        failures: dict[str, str] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, bytes]] = []

    def lint(self, filename: str, content: bytes) -> list[RawDiagnostic]:
        self.calls.append((filename, content))
        if filename in self.failures:
            raise EngineError(self.failures[filename])
        if filename in self.responses:
            return list(self.responses[filename])
        if b"runs-on" in content:
            return []
        return [
            RawDiagnostic(
                message='"runs-on" section is missing in job "test"',
                line=4,
                column=3,
                kind="syntax-check",
            )
        ]


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def validator(engine: FakeEngine) -> WorkflowValidator:
    return WorkflowValidator(engine)


@pytest.fixture
def aggregator(validator: WorkflowValidator) -> DirectoryAggregator:
    return DirectoryAggregator(validator, max_workers=4)


@pytest.fixture
def workflow_dir(tmp_path: Path) -> Path:
    """A directory holding one clean and one broken workflow."""
    d = tmp_path / "workflows"
    d.mkdir()
    (d / "ci.yml").write_text(VALID_WORKFLOW)
    (d / "broken.yaml").write_text(INVALID_WORKFLOW)
    return d
