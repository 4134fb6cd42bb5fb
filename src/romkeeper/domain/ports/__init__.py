"""Domain port definitions for adapters."""

from __future__ import annotations

from .containers import ArchiveAdapter, ContainerAdapter, ContainerLookup, TrackedImageAdapter
from .persistence import (
    GameRepository,
    HeaderRepository,
    RomfileRepository,
    RomRepository,
    SettingRepository,
    SystemRepository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ArchiveAdapter",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "ContainerAdapter",
    "ContainerLookup",
    "GameRepository",
    "HeaderRepository",
    "RepositoryCollection",
    "RomRepository",
    "RomfileRepository",
    "SettingRepository",
    "SystemRepository",
    "TrackedImageAdapter",
    "UnitOfWork",
]
