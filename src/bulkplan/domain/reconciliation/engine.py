"""Dry-run orchestration over validated rows.

The engine reads from an ``EntityLookup`` and never mutates it, so the same
input can be dry-run repeatedly. Rows are processed strictly in input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bulkplan.domain.schema import EntityKind, parse_entity_kind

from .contracts import DryRunResult, ImportOptions, RowError, RowWarning
from .keys import lookup_key
from .policy import plan_row

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bulkplan.domain.parsing import ParsedRow
    from bulkplan.domain.ports import EntityLookup, EntityRecord, IdGenerator

    from .contracts import ReconciledChange

log = getLogger(__name__)


@dataclass(slots=True)
class DryRunEngine:
    """Plan create/update/delete/skip decisions against a read-only population."""

    lookup: EntityLookup
    id_generator: IdGenerator

    def perform_dry_run(
        self,
        kind: EntityKind | str,
        rows: Iterable[ParsedRow],
        options: ImportOptions | None = None,
    ) -> DryRunResult:
        entity_kind = parse_entity_kind(kind)
        effective_options = options or ImportOptions()
        result = DryRunResult()

        for row in rows:
            if row.errors:
                result.errors.append(
                    RowError(
                        row=row.line_number,
                        error="; ".join(row.errors),
                        data=_raw_data(row),
                    )
                )
                result.summary.errors += 1
                continue

            try:
                change = self._plan(entity_kind, row, effective_options)
            except Exception as exc:  # noqa: BLE001
                log.exception("Failed to plan %s row %s", entity_kind, row.line_number)
                result.errors.append(
                    RowError(row=row.line_number, error=_describe(exc), data=dict(row.data))
                )
                result.summary.errors += 1
                continue

            result.changes.append(change)
            result.summary.record(change.operation)
            if change.reason:
                result.warnings.append(
                    RowWarning(row=row.line_number, warning=change.reason, data=dict(row.data))
                )

        summary = result.summary
        log.info(
            "Dry run for %s: creates=%s, updates=%s, deletes=%s, skips=%s, errors=%s",
            entity_kind,
            summary.creates,
            summary.updates,
            summary.deletes,
            summary.skips,
            summary.errors,
        )
        return result

    def _plan(self, kind: EntityKind, row: ParsedRow, options: ImportOptions) -> ReconciledChange:
        key = lookup_key(kind, row.data)
        existing: EntityRecord | None = None if key is None else self.lookup.find(kind, key)
        log.debug("Row %s: key=%r, existing=%s", row.line_number, key, existing is not None)
        return plan_row(kind, row.data, existing, options, id_generator=self.id_generator)


def perform_dry_run(
    kind: EntityKind | str,
    rows: Iterable[ParsedRow],
    options: ImportOptions | None = None,
    *,
    lookup: EntityLookup,
    id_generator: IdGenerator,
) -> DryRunResult:
    """Functional entry point equivalent to ``DryRunEngine(...).perform_dry_run``."""

    return DryRunEngine(lookup=lookup, id_generator=id_generator).perform_dry_run(
        kind, rows, options
    )


def _raw_data(row: ParsedRow) -> dict[str, object]:
    return dict(row.raw) if row.raw else dict(row.data)


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__
