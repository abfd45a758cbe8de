from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from bulkplan.adapters.memory import InMemoryEntityPopulation
from bulkplan.adapters.sqlalchemy import create_all_tables
from bulkplan.adapters.sqlalchemy.unit_of_work import SqlAlchemyLookupSession, shutdown, startup
from tests.support.ids import SequentialIdGenerator
from tests.support.populations import SEED_RECORDS

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def population() -> InMemoryEntityPopulation:
    return InMemoryEntityPopulation.from_records(SEED_RECORDS)


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_lookup_session(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyLookupSession]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyLookupSession:
        return SqlAlchemyLookupSession()

    try:
        yield factory
    finally:
        shutdown()
