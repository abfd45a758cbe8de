"""Declarative import schemas (pure, dependency-light).

A schema names the columns one entity kind accepts and the rule set every
column is validated against. Schemas are static configuration: the registry
below is built once at import time and never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TypeAlias

from .errors import UnknownSchemaError


class EntityKind(StrEnum):
    """Entity kinds that can be bulk-imported."""

    USERS = "users"
    CUSTOMERS = "customers"
    PROJECTS = "projects"
    ORGANIZATIONS = "organizations"


class FieldType(StrEnum):
    """Type tag selecting the coercion applied to a raw column value."""

    STRING = "string"
    NUMBER = "number"
    EMAIL = "email"
    DATE = "date"
    BOOLEAN = "boolean"


Transform: TypeAlias = Callable[[str], object]


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldRule:
    """Validation rule for one column.

    ``min``/``max`` are numeric bounds for ``FieldType.NUMBER`` and length bounds
    for every other type.
    """

    field: str
    required: bool = False
    type: FieldType = FieldType.STRING
    pattern: re.Pattern[str] | None = None
    min: float | None = None
    max: float | None = None
    choices: tuple[str, ...] | None = None
    transform: Transform | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Schema:
    """Required/optional columns plus per-field rules for one entity kind."""

    kind: EntityKind
    name: str
    required_fields: tuple[str, ...]
    optional_fields: tuple[str, ...] = ()
    rules: tuple[FieldRule, ...] = ()

    @property
    def all_fields(self) -> tuple[str, ...]:
        return self.required_fields + self.optional_fields

    @property
    def description(self) -> str:
        return f"Required: {', '.join(self.required_fields)}"


@dataclass(frozen=True, slots=True)
class SchemaInfo:
    key: str
    name: str
    description: str


PHONE_PATTERN = re.compile(r"^[\+]?[1-9][\d]{0,15}$")
ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")
DOMAIN_PATTERN = re.compile(r"^[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}$")
URL_PATTERN = re.compile(r"^https?://\S+$")


def _default_active(value: str) -> str:
    return value or "active"


USERS_SCHEMA = Schema(
    kind=EntityKind.USERS,
    name="Users",
    required_fields=("email", "first_name", "last_name", "role"),
    optional_fields=("phone", "department", "team", "status"),
    rules=(
        FieldRule(field="email", required=True, type=FieldType.EMAIL),
        FieldRule(field="first_name", required=True, min=1, max=50),
        FieldRule(field="last_name", required=True, min=1, max=50),
        FieldRule(
            field="role",
            required=True,
            choices=("admin", "manager", "employee", "client"),
        ),
        FieldRule(field="phone", pattern=PHONE_PATTERN),
        FieldRule(field="department", max=100),
        FieldRule(field="team", max=100),
        FieldRule(
            field="status",
            choices=("active", "inactive", "pending"),
            transform=_default_active,
        ),
    ),
)

CUSTOMERS_SCHEMA = Schema(
    kind=EntityKind.CUSTOMERS,
    name="Customers",
    required_fields=("name", "email", "type"),
    optional_fields=("phone", "address", "city", "state", "zip", "contact_person"),
    rules=(
        FieldRule(field="name", required=True, min=1, max=100),
        FieldRule(field="email", required=True, type=FieldType.EMAIL),
        FieldRule(
            field="type",
            required=True,
            choices=("individual", "business", "enterprise"),
        ),
        FieldRule(field="phone", pattern=PHONE_PATTERN),
        FieldRule(field="address", max=200),
        FieldRule(field="city", max=100),
        FieldRule(field="state", max=100),
        FieldRule(field="zip", pattern=ZIP_PATTERN),
        FieldRule(field="contact_person", max=100),
    ),
)

PROJECTS_SCHEMA = Schema(
    kind=EntityKind.PROJECTS,
    name="Projects",
    required_fields=("title", "customer_id", "status"),
    optional_fields=("description", "start_date", "due_date", "priority", "budget"),
    rules=(
        FieldRule(field="title", required=True, min=1, max=200),
        FieldRule(field="customer_id", required=True),
        FieldRule(
            field="status",
            required=True,
            choices=("planning", "active", "completed", "cancelled"),
        ),
        FieldRule(field="description", max=2000),
        FieldRule(field="start_date", type=FieldType.DATE),
        FieldRule(field="due_date", type=FieldType.DATE),
        FieldRule(field="priority", choices=("low", "medium", "high", "urgent")),
        FieldRule(field="budget", type=FieldType.NUMBER, min=0),
    ),
)

ORGANIZATIONS_SCHEMA = Schema(
    kind=EntityKind.ORGANIZATIONS,
    name="Organizations",
    required_fields=("name",),
    optional_fields=("domain", "industry", "website", "phone", "employee_count", "active"),
    rules=(
        FieldRule(field="name", required=True, min=1, max=100),
        FieldRule(field="domain", pattern=DOMAIN_PATTERN),
        FieldRule(field="industry", max=100),
        FieldRule(field="website", pattern=URL_PATTERN),
        FieldRule(field="phone", pattern=PHONE_PATTERN),
        FieldRule(field="employee_count", type=FieldType.NUMBER, min=0),
        FieldRule(field="active", type=FieldType.BOOLEAN),
    ),
)

SCHEMAS: Mapping[EntityKind, Schema] = MappingProxyType(
    {
        schema.kind: schema
        for schema in (USERS_SCHEMA, CUSTOMERS_SCHEMA, PROJECTS_SCHEMA, ORGANIZATIONS_SCHEMA)
    }
)


def parse_entity_kind(name: str | EntityKind) -> EntityKind:
    """Return the entity kind for ``name`` or raise ``UnknownSchemaError``."""

    if isinstance(name, EntityKind):
        return name
    try:
        return EntityKind(name.strip().lower())
    except ValueError as exc:
        raise UnknownSchemaError(name) from exc


def get_schema(name: str | EntityKind) -> Schema:
    """Look up a registered schema by entity kind or its string key."""

    return SCHEMAS[parse_entity_kind(name)]


def available_schemas() -> list[SchemaInfo]:
    return [
        SchemaInfo(key=kind.value, name=schema.name, description=schema.description)
        for kind, schema in SCHEMAS.items()
    ]
