"""Directory-wide validation: discover workflow files, lint them in parallel, summarise."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from pathlib import Path

from actionlint_mcp.models.diagnostics import DirectorySummary, EmptyDirectory, ValidationResult
from actionlint_mcp.models.errors import RequestError
from actionlint_mcp.service.validator import WorkflowValidator

logger = logging.getLogger("actionlint_mcp.aggregator")

WORKFLOW_SUFFIXES = (".yml", ".yaml")


def discover_workflows(directory: str) -> list[str]:
    """Return workflow files directly inside *directory*, sorted by path.

    Matching is case-sensitive and does not descend into subdirectories.
    Every matching entry is returned, including dangling symlinks and
    directories, so unreadable ones are reported rather than hidden.
    A missing or unreadable directory yields an empty list.
    """
    root = Path(directory)
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        logger.info("Cannot list %s: %s", directory, exc)
        return []
    return sorted(str(entry) for entry in entries if entry.name.endswith(WORKFLOW_SUFFIXES))


class DirectoryAggregator:
    """Scatter/gather wrapper around :class:`WorkflowValidator`.

    Each discovered file is validated on a bounded thread pool.  Results are
    collected on the calling thread only, so the summary needs no lock.  A
    failed document never aborts the run: it becomes a synthetic invalid
    result carrying the failure message.
    """

    def __init__(self, validator: WorkflowValidator, max_workers: int | None = None) -> None:
        self._validator = validator
        self._max_workers = max_workers

    def _validate_one(self, path: str) -> ValidationResult:
        outcome = self._validator.validate_path(path)
        if isinstance(outcome, RequestError):
            logger.warning("Validation of %s failed: %s", path, outcome.message)
            return ValidationResult.lint_failure(path, outcome.message)
        return outcome

    def aggregate(
        self, directory: str, timeout: float | None = None
    ) -> DirectorySummary | EmptyDirectory:
        """Validate every workflow file in *directory*.

        With a *timeout* (seconds), documents still pending when it expires
        are abandoned and the summary covers only the completed ones.
        """
        files = discover_workflows(directory)
        if not files:
            return EmptyDirectory(directory=directory)

        logger.info("Validating %d workflow file(s) in %s", len(files), directory)
        results: dict[str, ValidationResult] = {}
        pool = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="lint")
        futures: dict[Future[ValidationResult], str] = {
            pool.submit(self._validate_one, path): path for path in files
        }
        try:
            for future in as_completed(futures, timeout=timeout):
                path = futures[future]
                try:
                    results[path] = future.result()
                except Exception as exc:  # noqa: BLE001 - isolate per-document failures
                    logger.exception("Unexpected error validating %s", path)
                    results[path] = ValidationResult.lint_failure(path, str(exc))
        except FuturesTimeoutError:
            abandoned = [path for path in files if path not in results]
            logger.warning(
                "Deadline of %ss reached in %s; abandoned %d of %d file(s): %s",
                timeout,
                directory,
                len(abandoned),
                len(files),
                ", ".join(abandoned),
            )
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        return DirectorySummary.from_results(results)
