"""SQLAlchemy mapping metadata for the romkeeper catalog."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Table, orm
from sqlalchemy.orm import configure_mappers

from romkeeper.domain.model import Game, Header, Rom, Romfile, Setting, System

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables ---------------------------------------------------------------

system_table = Table(
    "system",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True),
    Column("arcade", Boolean, nullable=False, default=False),
    Column("complete", Boolean, nullable=False, default=False),
)

header_table = Table(
    "header",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "system_id",
        Integer,
        ForeignKey("system.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("name", String, nullable=False, default=""),
    Column("size", Integer, nullable=False, default=0),
)

game_table = Table(
    "game",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("system_id", Integer, ForeignKey("system.id", ondelete="CASCADE"), nullable=False),
    Column("name", String, nullable=False),
    Column("jbfolder", Boolean, nullable=False, default=False),
    Column("parent_id", Integer, ForeignKey("game.id"), nullable=True),
    Column("complete", Boolean, nullable=False, default=False),
    Index("ix_game_system_id_name", "system_id", "name"),
)

romfile_table = Table(
    "romfile",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("path", String, nullable=False, unique=True),
    Column("size", Integer, nullable=False),
)

rom_table = Table(
    "rom",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("game_id", Integer, ForeignKey("game.id", ondelete="CASCADE"), nullable=False),
    Column("name", String, nullable=False),
    Column("size", Integer, nullable=False),
    Column("crc", String(8), nullable=True),
    Column("md5", String(32), nullable=True),
    Column("sha1", String(40), nullable=True),
    Column("romfile_id", Integer, ForeignKey("romfile.id"), nullable=True),
    Column("parent_id", Integer, ForeignKey("rom.id"), nullable=True),
    Index("ix_rom_size_crc", "size", "crc"),
    Index("ix_rom_size_md5", "size", "md5"),
    Index("ix_rom_size_sha1", "size", "sha1"),
    Index("ix_rom_game_id", "game_id"),
    Index("ix_rom_romfile_id", "romfile_id"),
)

setting_table = Table(
    "setting",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", String, nullable=False, unique=True),
    Column("value", String, nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Map the catalog dataclasses onto their tables (once per process)."""

    log.debug("Configuring catalog mappers")
    mapper_registry.map_imperatively(System, system_table)
    mapper_registry.map_imperatively(Header, header_table)
    mapper_registry.map_imperatively(Game, game_table)
    mapper_registry.map_imperatively(Romfile, romfile_table)
    mapper_registry.map_imperatively(Rom, rom_table)
    mapper_registry.map_imperatively(Setting, setting_table)
    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
