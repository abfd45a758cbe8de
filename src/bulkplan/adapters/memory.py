"""In-memory, read-only entity population."""

from __future__ import annotations

from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from bulkplan.domain.reconciliation import lookup_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bulkplan.domain.ports import EntityRecord
    from bulkplan.domain.schema import EntityKind

log = getLogger(__name__)


class InMemoryEntityPopulation:
    """Snapshot of existing entities indexed by kind and lookup key."""

    def __init__(self, records_by_key: Mapping[EntityKind, Mapping[str, EntityRecord]]) -> None:
        self._records: dict[EntityKind, Mapping[str, EntityRecord]] = {
            kind: MappingProxyType(
                {key: MappingProxyType(dict(record)) for key, record in records.items()}
            )
            for kind, records in records_by_key.items()
        }

    @classmethod
    def from_records(
        cls, records_by_kind: Mapping[EntityKind, Iterable[EntityRecord]]
    ) -> InMemoryEntityPopulation:
        """Index plain records by the lookup key of their kind; first record wins."""

        indexed: dict[EntityKind, dict[str, EntityRecord]] = {}
        for kind, records in records_by_kind.items():
            by_key = indexed.setdefault(kind, {})
            for record in records:
                key = lookup_key(kind, record)
                if key is None:
                    log.warning("Ignoring %s record without a lookup key: %s", kind, record)
                    continue
                if key in by_key:
                    log.warning("Ignoring duplicate %s record for key %r", kind, key)
                    continue
                by_key[key] = record
        return cls(indexed)

    def find(self, kind: EntityKind, key: str) -> EntityRecord | None:
        records = self._records.get(kind)
        if records is None:
            return None
        return records.get(key)

    def count(self, kind: EntityKind) -> int:
        return len(self._records.get(kind, {}))
