"""Entity lookup backed by a SQLAlchemy session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from .tables import LOOKUP_COLUMNS_BY_KIND, TABLE_BY_KIND

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from bulkplan.domain.ports import EntityRecord
    from bulkplan.domain.schema import EntityKind


class SqlAlchemyEntityLookup:
    """Read-only ``EntityLookup`` querying one table per entity kind."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, kind: EntityKind, key: str) -> EntityRecord | None:
        table = TABLE_BY_KIND[kind]
        for column_name in LOOKUP_COLUMNS_BY_KIND[kind]:
            stmt = select(table).where(table.c[column_name] == key).limit(1)
            row = self.session.execute(stmt).mappings().first()
            if row is not None:
                return dict(row)
        return None
