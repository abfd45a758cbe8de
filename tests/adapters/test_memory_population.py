from __future__ import annotations

import pytest

from bulkplan.adapters.memory import InMemoryEntityPopulation
from bulkplan.domain.ports import EntityLookup
from bulkplan.domain.schema import EntityKind
from tests.support.populations import ACME, JOHN_DOE


def test_population_satisfies_lookup_port(population: InMemoryEntityPopulation) -> None:
    assert isinstance(population, EntityLookup)


def test_from_records_indexes_by_lookup_key(population: InMemoryEntityPopulation) -> None:
    assert population.find(EntityKind.USERS, "john.doe@example.com") == JOHN_DOE
    assert population.find(EntityKind.CUSTOMERS, "ACME Corp") == ACME
    assert population.find(EntityKind.CUSTOMERS, "contact@acme.com") is None
    assert population.find(EntityKind.ORGANIZATIONS, "anything") is None
    assert population.count(EntityKind.USERS) == 2


def test_first_record_wins_for_duplicate_keys() -> None:
    population = InMemoryEntityPopulation.from_records(
        {EntityKind.USERS: [JOHN_DOE, {**JOHN_DOE, "id": "user-9"}]}
    )

    found = population.find(EntityKind.USERS, "john.doe@example.com")

    assert found is not None
    assert found["id"] == "user-1"
    assert population.count(EntityKind.USERS) == 1


def test_records_without_key_are_ignored() -> None:
    population = InMemoryEntityPopulation.from_records({EntityKind.USERS: [{"id": "user-3"}]})

    assert population.count(EntityKind.USERS) == 0


def test_records_are_read_only(population: InMemoryEntityPopulation) -> None:
    found = population.find(EntityKind.USERS, "john.doe@example.com")
    assert found is not None

    with pytest.raises(TypeError):
        found["role"] = "admin"  # type: ignore[index]


def test_population_copies_source_records() -> None:
    source = dict(JOHN_DOE)
    population = InMemoryEntityPopulation.from_records({EntityKind.USERS: [source]})

    source["role"] = "admin"

    found = population.find(EntityKind.USERS, "john.doe@example.com")
    assert found is not None
    assert found["role"] == "employee"
