"""SQLAlchemy table metadata for the entity population read during dry runs."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

from bulkplan.domain.schema import EntityKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


users_table = Table(
    "users",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("first_name", String(50), nullable=False),
    Column("last_name", String(50), nullable=False),
    Column("role", String(20), nullable=False),
    Column("phone", String(20)),
    Column("department", String(100)),
    Column("team", String(100)),
    Column("status", String(20)),
)

customers_table = Table(
    "customers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(100), nullable=False, index=True),
    Column("email", String(320), nullable=False, index=True),
    Column("type", String(20), nullable=False),
    Column("phone", String(20)),
    Column("address", String(200)),
    Column("city", String(100)),
    Column("state", String(100)),
    Column("zip", String(10)),
    Column("contact_person", String(100)),
)

projects_table = Table(
    "projects",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(200), nullable=False, index=True),
    Column("customer_id", String(64), nullable=False),
    Column("status", String(20), nullable=False),
    Column("description", String(2000)),
    Column("start_date", UTCDateTime()),
    Column("due_date", UTCDateTime()),
    Column("priority", String(20)),
    Column("budget", Float()),
)

organizations_table = Table(
    "organizations",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(100), nullable=False, index=True),
    Column("domain", String(255)),
    Column("industry", String(100)),
    Column("website", String(255)),
    Column("phone", String(20)),
    Column("employee_count", Integer()),
    Column("active", Boolean()),
)

TABLE_BY_KIND: Final[dict[EntityKind, Table]] = {
    EntityKind.USERS: users_table,
    EntityKind.CUSTOMERS: customers_table,
    EntityKind.PROJECTS: projects_table,
    EntityKind.ORGANIZATIONS: organizations_table,
}

# Columns probed in order for a lookup key; mirrors the key derivation rules.
LOOKUP_COLUMNS_BY_KIND: Final[dict[EntityKind, tuple[str, ...]]] = {
    EntityKind.USERS: ("email",),
    EntityKind.CUSTOMERS: ("name", "email"),
    EntityKind.PROJECTS: ("title",),
    EntityKind.ORGANIZATIONS: ("name", "id"),
}


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine, checkfirst=True)
