"""Dry-run contract types shared by the policy, diff, estimate and engine stages."""

# switch off type warnings because of default_factory=list
# pyright: reportUnknownVariableType=false

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulkplan.domain.ports import EntityRecord
    from bulkplan.domain.schema import EntityKind

DEFAULT_BATCH_SIZE = 100


class Operation(StrEnum):
    """Planned outcome for one validated row."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SKIP = "skip"


class DiffKind(StrEnum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportOptions:
    """Caller policy for one dry run."""

    update_existing: bool = False
    skip_duplicates: bool = False
    delete_mode: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciledChange:
    operation: Operation
    entity_kind: EntityKind
    entity_id: str | None = None
    before: EntityRecord | None = None
    after: EntityRecord | None = None
    reason: str | None = None


@dataclass(slots=True)
class DryRunSummary:
    creates: int = 0
    updates: int = 0
    deletes: int = 0
    skips: int = 0
    errors: int = 0

    def record(self, operation: Operation) -> None:
        match operation:
            case Operation.CREATE:
                self.creates += 1
            case Operation.UPDATE:
                self.updates += 1
            case Operation.DELETE:
                self.deletes += 1
            case Operation.SKIP:
                self.skips += 1

    @property
    def planned(self) -> int:
        return self.creates + self.updates + self.deletes + self.skips


@dataclass(frozen=True, slots=True)
class RowError:
    row: int
    error: str
    data: EntityRecord


@dataclass(frozen=True, slots=True)
class RowWarning:
    row: int
    warning: str
    data: EntityRecord


@dataclass(slots=True)
class DryRunResult:
    """Terminal artifact of a dry run; plain data, owned by the caller."""

    changes: list[ReconciledChange] = field(default_factory=list)
    summary: DryRunSummary = field(default_factory=DryRunSummary)
    errors: list[RowError] = field(default_factory=list)
    warnings: list[RowWarning] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FieldDiff:
    field: str
    old_value: object
    new_value: object
    type: DiffKind


@dataclass(frozen=True, slots=True)
class ExecutionEstimate:
    estimated_seconds: int
    batch_count: int
    potential_issues: tuple[str, ...] = ()
