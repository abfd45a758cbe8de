"""Pydantic models describing JSON snapshots of the existing entity population.

A snapshot document maps entity kinds to lists of flat records::

    {"users": [{"id": "user-1", "email": "john.doe@example.com", ...}], ...}

Columns declared as dates by the kind's schema are parsed the same way CSV
values are, so stored and incoming dates compare equal.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from bulkplan.domain.parsing import parse_date
from bulkplan.domain.schema import EntityKind, FieldType, get_schema

from .memory import InMemoryEntityPopulation

ScalarValue = str | int | float | bool | datetime | None
SnapshotRecord = dict[str, ScalarValue]


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not validate."""


class SnapshotDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    users: list[SnapshotRecord] = Field(default_factory=list)
    customers: list[SnapshotRecord] = Field(default_factory=list)
    projects: list[SnapshotRecord] = Field(default_factory=list)
    organizations: list[SnapshotRecord] = Field(default_factory=list)

    @field_validator("users", "customers", "projects", "organizations")
    @classmethod
    def _normalise_records(
        cls, value: list[SnapshotRecord], info: ValidationInfo
    ) -> list[SnapshotRecord]:
        date_fields = _date_fields(EntityKind(info.field_name))
        records: list[SnapshotRecord] = []
        for index, record in enumerate(value):
            if not record:
                raise ValueError(f"record {index} is empty")
            records.append(_parse_dates(index, record, date_fields))
        return records

    def records_by_kind(self) -> dict[EntityKind, list[SnapshotRecord]]:
        return {kind: list(getattr(self, kind.value)) for kind in EntityKind}


def _date_fields(kind: EntityKind) -> frozenset[str]:
    return frozenset(
        rule.field for rule in get_schema(kind).rules if rule.type is FieldType.DATE
    )


def _parse_dates(
    index: int, record: SnapshotRecord, date_fields: frozenset[str]
) -> SnapshotRecord:
    parsed = dict(record)
    for name in date_fields & parsed.keys():
        value = parsed[name]
        if not isinstance(value, str):
            continue
        moment = parse_date(value)
        if moment is None:
            raise ValueError(f"record {index} has an invalid date in {name!r}: {value!r}")
        parsed[name] = moment
    return parsed


def parse_snapshot(text: str) -> InMemoryEntityPopulation:
    try:
        document = SnapshotDocument.model_validate_json(text)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot document: {exc}") from exc
    return InMemoryEntityPopulation.from_records(document.records_by_kind())


def load_snapshot(path: Path | str) -> InMemoryEntityPopulation:
    """Load and validate a snapshot file into a read-only population."""

    snapshot_path = Path(path)
    try:
        text = snapshot_path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc
    return parse_snapshot(text)
