"""Run-scoped collection of validation failures.

Collects failed validations during a single shopaction CLI run and flushes
them to a JSON summary plus an index of recent runs.
"""

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..validation.outcome import Failure, FailureCause

logger = logging.getLogger(__name__)

MAX_INDEXED_RUNS = 100


@dataclass
class CollectedFailure:
    """A single rejected payload."""
    failure_id: str                  # Short identifier
    run_id: str
    timestamp: str                   # ISO timestamp
    source: str                      # File path, "<stdin>", or "file:line"
    failure: Failure

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "failure_id": self.failure_id,
            "run_id": self.run_id,
            "timestamp": self.timestamp,
            "source": self.source,
            **self.failure.to_dict(),
        }


@dataclass
class FailureSummary:
    """Summary of failures for a complete run."""
    run_id: str
    command: str
    started_at: str
    completed_at: str
    duration_seconds: float
    total_validated: int
    total_failures: int
    failures_by_cause: dict[str, int]
    failures: list[CollectedFailure]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schema_version": "1.0.0",
            "run_id": self.run_id,
            "command": self.command,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "duration_seconds": self.duration_seconds,
            "total_validated": self.total_validated,
            "total_failures": self.total_failures,
            "failures_by_cause": self.failures_by_cause,
            "failures": [f.to_dict() for f in self.failures],
        }


class FailureCollector:
    """Collects validation failures during a single run."""

    def __init__(self, errors_dir: Path, command: str):
        """Initialize failure collector.

        Args:
            errors_dir: Directory receiving run summaries and the index
            command: CLI command being executed
        """
        self.errors_dir = errors_dir
        self.command = command
        self.start_time = datetime.now(UTC)
        self.run_id = self._generate_run_id()
        self.total_validated = 0
        self.failures: list[CollectedFailure] = []

        logger.debug(f"Initialized failure collector for run {self.run_id}")

    def record_success(self, source: str) -> None:
        """Count a payload that validated."""
        self.total_validated += 1
        logger.debug(f"Validated {source}")

    def collect_failure(self, source: str, failure: Failure) -> str:
        """Collect a failed validation for later flush.

        Returns:
            Failure ID for reference
        """
        self.total_validated += 1
        failure_id = str(uuid.uuid4())[:8]
        self.failures.append(CollectedFailure(
            failure_id=failure_id,
            run_id=self.run_id,
            timestamp=datetime.now(UTC).isoformat(),
            source=source,
            failure=failure,
        ))

        logger.debug(f"Collected failure {failure_id} for {source}: {failure.message}")
        return failure_id

    def has_failures(self) -> bool:
        return len(self.failures) > 0

    def get_failure_counts(self) -> dict[str, int]:
        """Get failure counts by cause."""
        counts = {cause.value: 0 for cause in FailureCause}
        for collected in self.failures:
            counts[collected.failure.cause.value] += 1
        return counts

    def build_summary(self) -> FailureSummary:
        end_time = datetime.now(UTC)
        return FailureSummary(
            run_id=self.run_id,
            command=self.command,
            started_at=self.start_time.isoformat(),
            completed_at=end_time.isoformat(),
            duration_seconds=(end_time - self.start_time).total_seconds(),
            total_validated=self.total_validated,
            total_failures=len(self.failures),
            failures_by_cause=self.get_failure_counts(),
            failures=self.failures,
        )

    def flush_to_filesystem(self) -> Path | None:
        """Write collected failures to the errors directory.

        Returns:
            Path to the run summary file, or None if nothing failed
        """
        if not self.failures:
            logger.debug(f"No failures to flush for run {self.run_id}")
            return None

        self.errors_dir.mkdir(parents=True, exist_ok=True)
        summary = self.build_summary()

        summary_file = self.errors_dir / f"{self.run_id}.json"
        with open(summary_file, "w", encoding="utf-8") as f:
            json.dump(summary.to_dict(), f, indent=2, ensure_ascii=False)

        self._update_index(summary)

        logger.info(f"Flushed {len(self.failures)} failures to: {summary_file}")
        return summary_file

    def _update_index(self, summary: FailureSummary) -> None:
        index_file = self.errors_dir / "index.json"

        if index_file.exists():
            try:
                with open(index_file, encoding="utf-8") as f:
                    index_data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to read failures index, creating new one: {e}")
                index_data = self._create_empty_index()
        else:
            index_data = self._create_empty_index()

        run_entry = {
            "run_id": summary.run_id,
            "command": summary.command,
            "started_at": summary.started_at,
            "duration_seconds": summary.duration_seconds,
            "total_validated": summary.total_validated,
            "total_failures": summary.total_failures,
            "failures_by_cause": summary.failures_by_cause,
            "summary_file": f"{summary.run_id}.json",
        }

        runs = [run for run in index_data["runs"] if run["run_id"] != summary.run_id]
        runs.append(run_entry)
        runs.sort(key=lambda r: r["started_at"], reverse=True)

        # Drop summaries of runs that fall off the index
        for old_run in runs[MAX_INDEXED_RUNS:]:
            old_file = self.errors_dir / old_run["summary_file"]
            if old_file.exists():
                old_file.unlink()
        runs = runs[:MAX_INDEXED_RUNS]

        index_data["runs"] = runs
        index_data["total_runs"] = len(runs)
        index_data["last_updated"] = datetime.now(UTC).isoformat()

        with open(index_file, "w", encoding="utf-8") as f:
            json.dump(index_data, f, indent=2, ensure_ascii=False)

    def _create_empty_index(self) -> dict[str, Any]:
        now = datetime.now(UTC).isoformat()
        return {
            "schema_version": "1.0.0",
            "created_at": now,
            "last_updated": now,
            "total_runs": 0,
            "description": "Validation failure index for shopaction runs",
            "runs": [],
        }

    def _generate_run_id(self) -> str:
        # Format: run-YYYYMMDD-HHMMSS-{short_uuid}
        timestamp_part = self.start_time.strftime("run-%Y%m%d-%H%M%S")
        return f"{timestamp_part}-{str(uuid.uuid4())[:8]}"


def create_failure_collector(errors_dir: Path, command: str) -> FailureCollector:
    """Create failure collector for a shopaction run."""
    return FailureCollector(errors_dir, command)
