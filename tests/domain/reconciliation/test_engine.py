from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from bulkplan.domain.errors import UnknownSchemaError
from bulkplan.domain.parsing import parse
from bulkplan.domain.reconciliation import (
    DiffKind,
    DryRunEngine,
    ImportOptions,
    Operation,
    generate_diff,
    perform_dry_run,
)
from bulkplan.domain.schema import EntityKind
from tests.support.ids import SequentialIdGenerator
from tests.support.populations import JOHN_DOE, make_row

if TYPE_CHECKING:
    from bulkplan.adapters.memory import InMemoryEntityPopulation
    from bulkplan.domain.ports import EntityRecord

NEW_USER = {"email": "new@x.com", "first_name": "A", "last_name": "B", "role": "employee"}


def _engine(population: InMemoryEntityPopulation) -> DryRunEngine:
    return DryRunEngine(lookup=population, id_generator=SequentialIdGenerator())


def test_unknown_row_is_planned_as_create(population: InMemoryEntityPopulation) -> None:
    result = _engine(population).perform_dry_run(
        EntityKind.USERS, [make_row(NEW_USER)], ImportOptions()
    )

    (change,) = result.changes
    assert change.operation is Operation.CREATE
    assert change.after == {**NEW_USER, "id": "new-1"}
    assert result.summary.creates == 1
    assert result.warnings == []


def test_duplicate_is_skipped_when_updates_disabled(
    population: InMemoryEntityPopulation,
) -> None:
    row = make_row({**NEW_USER, "email": "john.doe@example.com"})

    result = _engine(population).perform_dry_run(EntityKind.USERS, [row], ImportOptions())

    (change,) = result.changes
    assert change.operation is Operation.SKIP
    assert change.reason == "duplicate found but updates disabled"
    assert result.summary.skips == 1
    assert [warning.warning for warning in result.warnings] == [change.reason]


def test_changed_role_is_planned_as_update(population: InMemoryEntityPopulation) -> None:
    row = make_row({"email": "john.doe@example.com", "role": "manager"})

    result = _engine(population).perform_dry_run(
        EntityKind.USERS, [row], ImportOptions(update_existing=True)
    )

    (change,) = result.changes
    assert change.operation is Operation.UPDATE
    assert change.before is not None
    assert change.after is not None
    diff = generate_diff(change.before, change.after)
    assert [(d.field, d.old_value, d.new_value, d.type) for d in diff] == [
        ("role", "employee", "manager", DiffKind.MODIFIED)
    ]
    assert result.summary.updates == 1


def test_delete_mode_uses_existing_snapshot(population: InMemoryEntityPopulation) -> None:
    row = make_row({"email": "john.doe@example.com", "role": "employee"})

    result = _engine(population).perform_dry_run(
        EntityKind.USERS, [row], ImportOptions(delete_mode=True)
    )

    (change,) = result.changes
    assert change.operation is Operation.DELETE
    assert change.before == JOHN_DOE
    assert result.summary.deletes == 1


def test_rows_with_errors_are_not_planned(population: InMemoryEntityPopulation) -> None:
    text = "email,first_name,last_name,role\n,A,B,employee\nnew@x.com,A,B,employee"
    parsed = parse(text, EntityKind.USERS)

    result = _engine(population).perform_dry_run(EntityKind.USERS, parsed.rows, ImportOptions())

    assert result.summary.errors == 1
    assert result.summary.creates == 1
    (error,) = result.errors
    assert error.row == 2
    assert "email" in error.error
    assert error.data == {"email": "", "first_name": "A", "last_name": "B", "role": "employee"}
    assert len(result.changes) == 1


def test_row_errors_are_joined(population: InMemoryEntityPopulation) -> None:
    row = make_row(NEW_USER, line_number=7, errors=("email: bad", "role: bad"))

    result = _engine(population).perform_dry_run(EntityKind.USERS, [row])

    assert result.errors[0].row == 7
    assert result.errors[0].error == "email: bad; role: bad"


def test_planning_failure_becomes_row_error(population: InMemoryEntityPopulation) -> None:
    class _BrokenLookup:
        def find(self, kind: EntityKind, key: str) -> EntityRecord | None:
            if key == "boom@x.com":
                raise RuntimeError("lookup unavailable")
            return population.find(kind, key)

    rows = [
        make_row({**NEW_USER, "email": "boom@x.com"}, line_number=2),
        make_row(NEW_USER, line_number=3),
    ]

    result = perform_dry_run(
        EntityKind.USERS,
        rows,
        ImportOptions(),
        lookup=_BrokenLookup(),
        id_generator=SequentialIdGenerator(),
    )

    assert result.summary.errors == 1
    assert result.errors[0].row == 2
    assert result.errors[0].error == "lookup unavailable"
    assert [change.operation for change in result.changes] == [Operation.CREATE]


def test_dry_run_preserves_order_and_counts(population: InMemoryEntityPopulation) -> None:
    rows = [
        make_row(NEW_USER, line_number=2),
        make_row({"email": "jane.smith@example.com", "role": "admin"}, line_number=3),
        make_row({"email": "john.doe@example.com", "role": "employee"}, line_number=4),
        make_row({**NEW_USER, "email": "other@x.com"}, line_number=5),
    ]

    result = _engine(population).perform_dry_run(
        "users", rows, ImportOptions(update_existing=True)
    )

    assert [change.operation for change in result.changes] == [
        Operation.CREATE,
        Operation.UPDATE,
        Operation.SKIP,
        Operation.CREATE,
    ]
    assert [warning.row for warning in result.warnings] == [3, 4]
    assert result.summary.planned == 4
    assert (result.summary.creates, result.summary.updates, result.summary.skips) == (2, 1, 1)


def test_dry_run_is_deterministic(population: InMemoryEntityPopulation) -> None:
    rows = [make_row(NEW_USER), make_row({"email": "john.doe@example.com", "role": "admin"})]
    options = ImportOptions(update_existing=True)

    first = _engine(population).perform_dry_run(EntityKind.USERS, rows, options)
    second = _engine(population).perform_dry_run(EntityKind.USERS, rows, options)

    assert first == second


def test_dry_run_does_not_mutate_population(population: InMemoryEntityPopulation) -> None:
    row = make_row({"email": "john.doe@example.com", "role": "admin"})

    _engine(population).perform_dry_run(
        EntityKind.USERS, [row], ImportOptions(update_existing=True)
    )

    assert population.find(EntityKind.USERS, "john.doe@example.com") == JOHN_DOE


def test_customers_match_by_name(population: InMemoryEntityPopulation) -> None:
    row = make_row({"name": "ACME Corp", "email": "new@acme.com", "type": "business"})

    result = _engine(population).perform_dry_run(
        EntityKind.CUSTOMERS, [row], ImportOptions(skip_duplicates=True)
    )

    assert result.changes[0].operation is Operation.SKIP
    assert result.changes[0].entity_id == "cust-1"


def test_unknown_entity_kind_is_rejected(population: InMemoryEntityPopulation) -> None:
    with pytest.raises(UnknownSchemaError, match="invoices"):
        _engine(population).perform_dry_run("invoices", [])
