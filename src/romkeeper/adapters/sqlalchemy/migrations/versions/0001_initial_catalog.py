"""initial catalog

Revision ID: 0001_initial_catalog
Revises:
Create Date: 2026-10-19 09:00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial_catalog"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "system",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("arcade", sa.Boolean(), nullable=False),
        sa.Column("complete", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_system")),
        sa.UniqueConstraint("name", name=op.f("uq_system_name")),
    )
    op.create_table(
        "header",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("system_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["system_id"],
            ["system.id"],
            name=op.f("fk_header_system_id_system"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_header")),
        sa.UniqueConstraint("system_id", name=op.f("uq_header_system_id")),
    )
    op.create_table(
        "game",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("system_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("jbfolder", sa.Boolean(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("complete", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["game.id"],
            name=op.f("fk_game_parent_id_game"),
        ),
        sa.ForeignKeyConstraint(
            ["system_id"],
            ["system.id"],
            name=op.f("fk_game_system_id_system"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_game")),
    )
    op.create_index("ix_game_system_id_name", "game", ["system_id", "name"])
    op.create_table(
        "romfile",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("path", sa.String(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_romfile")),
        sa.UniqueConstraint("path", name=op.f("uq_romfile_path")),
    )
    op.create_table(
        "rom",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("crc", sa.String(length=8), nullable=True),
        sa.Column("md5", sa.String(length=32), nullable=True),
        sa.Column("sha1", sa.String(length=40), nullable=True),
        sa.Column("romfile_id", sa.Integer(), nullable=True),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["game_id"],
            ["game.id"],
            name=op.f("fk_rom_game_id_game"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["parent_id"],
            ["rom.id"],
            name=op.f("fk_rom_parent_id_rom"),
        ),
        sa.ForeignKeyConstraint(
            ["romfile_id"],
            ["romfile.id"],
            name=op.f("fk_rom_romfile_id_romfile"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_rom")),
    )
    op.create_index("ix_rom_size_crc", "rom", ["size", "crc"])
    op.create_index("ix_rom_size_md5", "rom", ["size", "md5"])
    op.create_index("ix_rom_size_sha1", "rom", ["size", "sha1"])
    op.create_index("ix_rom_game_id", "rom", ["game_id"])
    op.create_index("ix_rom_romfile_id", "rom", ["romfile_id"])
    setting = op.create_table(
        "setting",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("value", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_setting")),
        sa.UniqueConstraint("key", name=op.f("uq_setting_key")),
    )
    op.bulk_insert(setting, [{"key": "HASH_ALGORITHM", "value": "CRC"}])


def downgrade() -> None:
    op.drop_table("setting")
    op.drop_index("ix_rom_romfile_id", table_name="rom")
    op.drop_index("ix_rom_game_id", table_name="rom")
    op.drop_index("ix_rom_size_sha1", table_name="rom")
    op.drop_index("ix_rom_size_md5", table_name="rom")
    op.drop_index("ix_rom_size_crc", table_name="rom")
    op.drop_table("rom")
    op.drop_table("romfile")
    op.drop_index("ix_game_system_id_name", table_name="game")
    op.drop_table("game")
    op.drop_table("header")
    op.drop_table("system")
