"""Execution estimate for a planned change list."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Final

from .contracts import DEFAULT_BATCH_SIZE, ExecutionEstimate, Operation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .contracts import ReconciledChange

OPERATIONS_PER_SECOND: Final = 50
LARGE_IMPORT_THRESHOLD: Final = 1000
HIGH_UPDATE_RATIO: Final = 0.8


def estimate_execution_time(
    changes: Sequence[ReconciledChange],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> ExecutionEstimate:
    """Estimate duration and batching; issues are advisory only."""

    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    total = len(changes)
    issues: list[str] = []
    if total > LARGE_IMPORT_THRESHOLD:
        issues.append("Large import may take several minutes")

    updates = sum(1 for change in changes if change.operation is Operation.UPDATE)
    if updates > total * HIGH_UPDATE_RATIO:
        issues.append("High update ratio may slow down import")

    if any(change.operation is Operation.DELETE for change in changes):
        issues.append("Delete operations cannot be easily undone")

    return ExecutionEstimate(
        estimated_seconds=max(1, math.ceil(total / OPERATIONS_PER_SECOND)),
        batch_count=math.ceil(total / batch_size),
        potential_issues=tuple(issues),
    )
