"""Dry-run reconciliation of validated rows against an existing population.

Flow for one import:
1) derive a lookup key per valid row
2) find the existing entity through the ``EntityLookup`` port
3) apply the policy decision table under ``ImportOptions``
4) aggregate changes, summary counts, errors and warnings
5) optionally estimate execution time and diff individual changes
"""

from __future__ import annotations

from .contracts import (
    DEFAULT_BATCH_SIZE,
    DiffKind,
    DryRunResult,
    DryRunSummary,
    ExecutionEstimate,
    FieldDiff,
    ImportOptions,
    Operation,
    ReconciledChange,
    RowError,
    RowWarning,
)
from .diff import generate_diff, has_changes
from .engine import DryRunEngine, perform_dry_run
from .estimate import estimate_execution_time
from .keys import lookup_key, record_fingerprint
from .policy import plan_row

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DiffKind",
    "DryRunEngine",
    "DryRunResult",
    "DryRunSummary",
    "ExecutionEstimate",
    "FieldDiff",
    "ImportOptions",
    "Operation",
    "ReconciledChange",
    "RowError",
    "RowWarning",
    "estimate_execution_time",
    "generate_diff",
    "has_changes",
    "lookup_key",
    "perform_dry_run",
    "plan_row",
    "record_fingerprint",
]
