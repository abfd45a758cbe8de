"""SQLAlchemy adapter package for bulkplan."""

from __future__ import annotations

from .repositories import SqlAlchemyEntityLookup
from .tables import (
    LOOKUP_COLUMNS_BY_KIND,
    TABLE_BY_KIND,
    create_all_tables,
    metadata,
)
from .unit_of_work import (
    SqlAlchemyLookupSession,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "LOOKUP_COLUMNS_BY_KIND",
    "TABLE_BY_KIND",
    "SqlAlchemyEntityLookup",
    "SqlAlchemyLookupSession",
    "StartupError",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
