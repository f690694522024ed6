"""Run-scoped diagnostics for shopaction.

Collects rejected payloads during a CLI run and writes them out for
later inspection.
"""

from .failure_collector import (
    CollectedFailure,
    FailureCollector,
    FailureSummary,
    create_failure_collector,
)

__all__ = [
    "CollectedFailure",
    "FailureCollector",
    "FailureSummary",
    "create_failure_collector",
]
