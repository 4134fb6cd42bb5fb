from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from romkeeper.adapters.sqlalchemy import start_mappers
from romkeeper.adapters.sqlalchemy.migrations import upgrade_head
from romkeeper.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from romkeeper.config import LibraryConfig
from tests.helpers.catalog import CatalogSeeder
from tests.support.containers import build_test_registry

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from romkeeper.adapters.containers import ContainerRegistry


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True, expire_on_commit=False)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def catalog(sqlite_session: Session) -> CatalogSeeder:
    return CatalogSeeder(sqlite_session)


@pytest.fixture
def library(tmp_path: Path) -> LibraryConfig:
    root = tmp_path.resolve()
    config = LibraryConfig(rom_directory=root / "library", tmp_directory=root / "scratch")
    config.ensure_directories()
    return config


@pytest.fixture
def inbox(tmp_path: Path) -> Path:
    directory = tmp_path.resolve() / "inbox"
    directory.mkdir()
    return directory


@pytest.fixture
def containers() -> ContainerRegistry:
    return build_test_registry()
