"""Read-only access to the existing entity population."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from bulkplan.domain.schema import EntityKind

EntityRecord: TypeAlias = Mapping[str, object]


@runtime_checkable
class EntityLookup(Protocol):
    """Find an existing entity by its lookup key.

    Implementations must not change the snapshot they serve while a dry run is
    reading from it.
    """

    def find(self, kind: EntityKind, key: str) -> EntityRecord | None: ...
