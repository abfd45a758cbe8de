"""Decision table mapping one validated row to a planned operation.

Precedence:
1. delete mode: delete what exists, skip what does not
2. existing match with ``skip_duplicates``: skip
3. existing match with ``update_existing``: update when incoming fields differ,
   otherwise skip
4. any other existing match: skip
5. no match: create with a freshly generated id
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .contracts import Operation, ReconciledChange
from .diff import has_changes

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulkplan.domain.ports import EntityRecord, IdGenerator
    from bulkplan.domain.schema import EntityKind

    from .contracts import ImportOptions

REASON_MARKED_FOR_DELETION: Final = "marked for deletion"
REASON_NOT_FOUND_FOR_DELETION: Final = "not found for deletion"
REASON_DUPLICATE: Final = "duplicate"
REASON_DATA_DIFFERS: Final = "data differs"
REASON_NO_CHANGES: Final = "no changes"
REASON_UPDATES_DISABLED: Final = "duplicate found but updates disabled"


def plan_row(
    kind: EntityKind,
    data: Mapping[str, object],
    existing: EntityRecord | None,
    options: ImportOptions,
    *,
    id_generator: IdGenerator,
) -> ReconciledChange:
    """Decide what executing the import would do with ``data``."""

    if options.delete_mode:
        if existing is None:
            return ReconciledChange(
                operation=Operation.SKIP,
                entity_kind=kind,
                reason=REASON_NOT_FOUND_FOR_DELETION,
            )
        return ReconciledChange(
            operation=Operation.DELETE,
            entity_kind=kind,
            entity_id=_entity_id(existing),
            before=dict(existing),
            reason=REASON_MARKED_FOR_DELETION,
        )

    if existing is None:
        return ReconciledChange(
            operation=Operation.CREATE,
            entity_kind=kind,
            after={**data, "id": id_generator.new_id()},
        )

    entity_id = _entity_id(existing)
    if options.skip_duplicates:
        return _skip(kind, entity_id, REASON_DUPLICATE)

    if not options.update_existing:
        return _skip(kind, entity_id, REASON_UPDATES_DISABLED)

    if not has_changes(existing, data):
        return _skip(kind, entity_id, REASON_NO_CHANGES)

    return ReconciledChange(
        operation=Operation.UPDATE,
        entity_kind=kind,
        entity_id=entity_id,
        before=dict(existing),
        after={**existing, **data},
        reason=REASON_DATA_DIFFERS,
    )


def _skip(kind: EntityKind, entity_id: str | None, reason: str) -> ReconciledChange:
    return ReconciledChange(
        operation=Operation.SKIP,
        entity_kind=kind,
        entity_id=entity_id,
        reason=reason,
    )


def _entity_id(record: EntityRecord) -> str | None:
    value = record.get("id")
    return None if value is None else str(value)
