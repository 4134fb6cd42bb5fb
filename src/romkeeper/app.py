"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from romkeeper.adapters.containers import detect_container_registry
from romkeeper.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork, startup
from romkeeper.config import ConfigurationError, get_library_config
from romkeeper.config.settings import HASH_ALGORITHM_KEY, resolve_hash_algorithm
from romkeeper.domain.ports.unit_of_work import CatalogUnitOfWork
from romkeeper.domain.reconciliation import (
    ReconciliationEngine,
    approve_moves,
    decline_moves,
    first_candidate,
)

if TYPE_CHECKING:
    from pathlib import Path

    from romkeeper.config import LibraryConfig
    from romkeeper.domain.model import HashAlgorithm, System
    from romkeeper.domain.ports import ContainerLookup
    from romkeeper.domain.reconciliation import (
        CheckReport,
        Confirmation,
        Disambiguator,
        ImportReport,
    )

type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]
type SystemChooser = Callable[[Sequence[System]], System | None]

log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    startup()
    return SqlAlchemyCatalogUnitOfWork


def load_hash_algorithm(
    unit_of_work_factory: UnitOfWorkFactory,
    override: str | None = None,
) -> HashAlgorithm:
    with unit_of_work_factory() as uow:
        stored = uow.repositories.settings.get_value(HASH_ALGORITHM_KEY)
    return resolve_hash_algorithm(override, stored)


def select_systems(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    name: str | None = None,
    all_systems: bool = False,
    choose: SystemChooser | None = None,
) -> list[System]:
    """Resolve the systems a command applies to before any file is touched."""

    with unit_of_work_factory() as uow:
        systems = list(uow.repositories.systems.list_all())
        named = uow.repositories.systems.get_by_name(name) if name is not None else None
    if not systems:
        raise ConfigurationError("The catalog has no systems; import a dat file first")
    if all_systems:
        return systems
    if name is not None:
        if named is None:
            raise ConfigurationError(f"Unknown system {name!r}")
        return [named]
    chosen = choose(systems) if choose is not None else None
    if chosen is None:
        raise ConfigurationError("No system selected (use --system)")
    return [chosen]


def build_engine(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    config: LibraryConfig | None = None,
    containers: ContainerLookup | None = None,
    disambiguate: Disambiguator = first_candidate,
    confirm: Confirmation = decline_moves,
) -> ReconciliationEngine:
    library = config or get_library_config()
    library.ensure_directories()
    return ReconciliationEngine(
        config=library,
        unit_of_work_factory=unit_of_work_factory,
        containers=containers or detect_container_registry(),
        disambiguate=disambiguate,
        confirm=confirm,
    )


def check_roms(
    *,
    system_name: str | None = None,
    all_systems: bool = False,
    assume_yes: bool = False,
    choose_system: SystemChooser | None = None,
    confirm: Confirmation = decline_moves,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: LibraryConfig | None = None,
    containers: ContainerLookup | None = None,
) -> list[CheckReport]:
    """Verify filed romfiles of the selected systems and trash the invalid ones."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    algorithm = load_hash_algorithm(effective_uow)
    systems = select_systems(
        effective_uow,
        name=system_name,
        all_systems=all_systems,
        choose=choose_system,
    )
    engine = build_engine(
        unit_of_work_factory=effective_uow,
        config=config,
        containers=containers,
        confirm=approve_moves if assume_yes else confirm,
    )
    log.info("Checking %d system(s) using %s", len(systems), algorithm)
    return [engine.check_system(system.key, algorithm=algorithm) for system in systems]


def import_roms(
    paths: Sequence[Path],
    *,
    system_name: str | None = None,
    hash_algorithm: str | None = None,
    choose_system: SystemChooser | None = None,
    disambiguate: Disambiguator = first_candidate,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: LibraryConfig | None = None,
    containers: ContainerLookup | None = None,
) -> ImportReport:
    """Import files (or directories of files) into one system of the library."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    algorithm = load_hash_algorithm(effective_uow, hash_algorithm)
    (system,) = select_systems(effective_uow, name=system_name, choose=choose_system)
    engine = build_engine(
        unit_of_work_factory=effective_uow,
        config=config,
        containers=containers,
        disambiguate=disambiguate,
    )
    log.info('Importing into "%s" using %s', system.name, algorithm)
    return engine.import_paths(paths, system_id=system.key, algorithm=algorithm)
