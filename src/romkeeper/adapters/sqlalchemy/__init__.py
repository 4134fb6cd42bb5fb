"""SQLAlchemy adapter package for romkeeper."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    game_table,
    header_table,
    mapper_registry,
    rom_table,
    romfile_table,
    setting_table,
    start_mappers,
    system_table,
)
from .repositories import (
    SqlAlchemyGameRepository,
    SqlAlchemyHeaderRepository,
    SqlAlchemyRomfileRepository,
    SqlAlchemyRomRepository,
    SqlAlchemySettingRepository,
    SqlAlchemySystemRepository,
)
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyGameRepository",
    "SqlAlchemyHeaderRepository",
    "SqlAlchemyRomRepository",
    "SqlAlchemyRomfileRepository",
    "SqlAlchemySettingRepository",
    "SqlAlchemySystemRepository",
    "StartupError",
    "create_all_tables",
    "game_table",
    "header_table",
    "mapper_registry",
    "rom_table",
    "romfile_table",
    "setting_table",
    "shutdown",
    "start_mappers",
    "startup",
    "system_table",
]
