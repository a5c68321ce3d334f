from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.pool import StaticPool

from kprune.adapters.sqlalchemy import SqlAlchemyInventoryStore, shutdown, startup
from tests.helpers.cluster import FakeClusterClient, FakeResolver, InMemoryInventoryStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection so the prune thread sees the same in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyInventoryStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyInventoryStore()
    finally:
        shutdown()


@pytest.fixture
def cluster_client() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def memory_store() -> InMemoryInventoryStore:
    return InMemoryInventoryStore()
