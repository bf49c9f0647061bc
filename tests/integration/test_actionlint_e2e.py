"""Integration tests against the real ``actionlint`` executable.

Skipped when actionlint is not on PATH (it ships with the ``actionlint-py``
distribution).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from actionlint_mcp.engine.actionlint import ActionlintEngine
from actionlint_mcp.models.diagnostics import DirectorySummary, Severity, ValidationResult
from actionlint_mcp.service.aggregator import DirectoryAggregator
from actionlint_mcp.service.validator import WorkflowValidator
from tests.conftest import ACTIONLINT_AVAILABLE, INVALID_WORKFLOW, VALID_WORKFLOW

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not ACTIONLINT_AVAILABLE, reason="actionlint not installed"),
]

CIRCULAR_NEEDS = """\
name: Circular Deps
on: push
jobs:
  job1:
    needs: job2
    runs-on: ubuntu-latest
    steps:
      - run: echo "job1"
  job2:
    needs: job1
    runs-on: ubuntu-latest
    steps:
      - run: echo "job2"
"""

BAD_EXPRESSION = """\
name: Invalid Expression
on: push
jobs:
  test:
    runs-on: ubuntu-latest
    steps:
      - run: echo "test"
        if: ${{ invalid expression }}
"""

TAB_INDENTED = "name: Tabs\non: push\njobs:\n\ttest:\n\t\truns-on: ubuntu-latest\n"

WITH_OUTPUTS = """\
name: With Outputs
on: push
jobs:
  setup:
    runs-on: ubuntu-latest
    outputs:
      version: ${{ steps.get_version.outputs.version }}
    steps:
      - id: get_version
        run: echo "version=1.0.0" >> $GITHUB_OUTPUT
  build:
    needs: setup
    runs-on: ubuntu-latest
    steps:
      - run: echo "Building version ${{ needs.setup.outputs.version }}"
"""


@pytest.fixture
def real_validator() -> WorkflowValidator:
    return WorkflowValidator(ActionlintEngine(timeout=60))


def _lint(validator: WorkflowValidator, content: str) -> ValidationResult:
    outcome = validator.validate_content(content)
    assert isinstance(outcome, ValidationResult), outcome
    return outcome


class TestRealEngine:
    @pytest.mark.parametrize("content", [VALID_WORKFLOW, WITH_OUTPUTS])
    def test_valid_workflows(self, real_validator: WorkflowValidator, content: str) -> None:
        result = _lint(real_validator, content)
        assert result.valid is True, result.errors
        assert result.errors == []

    @pytest.mark.parametrize(
        "content", [INVALID_WORKFLOW, CIRCULAR_NEEDS, BAD_EXPRESSION, TAB_INDENTED, "   \n"]
    )
    def test_defective_workflows(self, real_validator: WorkflowValidator, content: str) -> None:
        result = _lint(real_validator, content)
        assert result.valid is False
        assert len(result.errors) >= 1
        assert all(d.line >= 0 and d.column >= 0 for d in result.errors)

    def test_missing_runs_on_is_an_error(self, real_validator: WorkflowValidator) -> None:
        result = _lint(real_validator, INVALID_WORKFLOW)
        assert any(d.severity == Severity.ERROR for d in result.errors)
        assert any("runs-on" in d.message for d in result.errors)

    def test_idempotent(self, real_validator: WorkflowValidator) -> None:
        first = _lint(real_validator, BAD_EXPRESSION)
        second = _lint(real_validator, BAD_EXPRESSION)
        assert first.model_dump_json() == second.model_dump_json()


class TestRealAggregate:
    def test_mixed_directory(self, real_validator: WorkflowValidator, workflow_dir: Path) -> None:
        summary = DirectoryAggregator(real_validator).aggregate(str(workflow_dir))
        assert isinstance(summary, DirectorySummary)
        assert summary.total_files == 2
        assert summary.files_with_errors == 1
        assert summary.total_errors >= 1

    def test_many_files(self, real_validator: WorkflowValidator, tmp_path: Path) -> None:
        for i in range(8):
            (tmp_path / f"wf{i}.yml").write_text(VALID_WORKFLOW if i % 2 else CIRCULAR_NEEDS)
        summary = DirectoryAggregator(real_validator, max_workers=4).aggregate(str(tmp_path))
        assert isinstance(summary, DirectorySummary)
        assert summary.total_files == 8
        assert summary.files_with_errors == 4
