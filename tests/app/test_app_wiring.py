from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from romkeeper.app import check_roms, import_roms, load_hash_algorithm, select_systems
from romkeeper.config import ConfigurationError
from romkeeper.domain.model import HashAlgorithm
from romkeeper.domain.reconciliation import ImportStatus, VerificationStatus

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from romkeeper.adapters.containers import ContainerRegistry
    from romkeeper.adapters.sqlalchemy import SqlAlchemyCatalogUnitOfWork
    from romkeeper.config import LibraryConfig
    from tests.helpers.catalog import CatalogSeeder

    UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def test_empty_catalog_is_a_configuration_error(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(ConfigurationError, match="no systems"):
        select_systems(sqlite_unit_of_work, all_systems=True)


def test_systems_are_selected_by_name_flag_or_chooser(
    sqlite_unit_of_work: UowFactory,
    catalog: CatalogSeeder,
) -> None:
    catalog.system("Nintendo - Game Boy")
    catalog.system("Sony - PlayStation")
    catalog.commit()

    everything = select_systems(sqlite_unit_of_work, all_systems=True)
    named = select_systems(sqlite_unit_of_work, name="Sony - PlayStation")
    chosen = select_systems(sqlite_unit_of_work, choose=lambda systems: systems[0])

    assert [system.name for system in everything] == ["Nintendo - Game Boy", "Sony - PlayStation"]
    assert [system.name for system in named] == ["Sony - PlayStation"]
    assert [system.name for system in chosen] == ["Nintendo - Game Boy"]
    with pytest.raises(ConfigurationError, match="Unknown system"):
        select_systems(sqlite_unit_of_work, name="Sega - Dreamcast")
    with pytest.raises(ConfigurationError, match="No system selected"):
        select_systems(sqlite_unit_of_work, choose=lambda _systems: None)


def test_hash_algorithm_comes_from_settings_unless_overridden(
    sqlite_unit_of_work: UowFactory,
) -> None:
    assert load_hash_algorithm(sqlite_unit_of_work) is HashAlgorithm.CRC
    assert load_hash_algorithm(sqlite_unit_of_work, "sha1") is HashAlgorithm.SHA1


def test_import_then_check_round(
    sqlite_unit_of_work: UowFactory,
    catalog: CatalogSeeder,
    library: LibraryConfig,
    containers: ContainerRegistry,
    inbox: Path,
) -> None:
    system = catalog.system("Nintendo - Game Boy")
    catalog.rom(catalog.game(system, "Tetris (World)"), "Tetris (World).gb", b"tetris" * 64)
    catalog.commit()
    (inbox / "tetris.gb").write_bytes(b"tetris" * 64)

    imported = import_roms(
        [inbox],
        system_name="Nintendo - Game Boy",
        hash_algorithm="md5",
        unit_of_work_factory=sqlite_unit_of_work,
        config=library,
        containers=containers,
    )

    destination = library.system_directory(system.name) / "Tetris (World).gb"
    assert imported.count(ImportStatus.PLACED) == 1
    destination.write_bytes(b"corrupt")

    (report,) = check_roms(
        all_systems=True,
        assume_yes=True,
        unit_of_work_factory=sqlite_unit_of_work,
        config=library,
        containers=containers,
    )

    assert report.count(VerificationStatus.INVALID) == 1
    assert report.confirmed is True
    assert (library.trash_directory(system.name) / "Tetris (World).gb").exists()
