from __future__ import annotations

from pathlib import Path

import pytest

from romkeeper.config import (
    TRASH_DIRECTORY_NAME,
    LibraryConfig,
    env_path,
    get_library_config,
)


def test_library_paths_come_from_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setenv("ROMKEEPER_ROM_DIRECTORY", str(tmp_path / "roms"))
    monkeypatch.setenv("ROMKEEPER_TMP_DIRECTORY", f"  {tmp_path / 'scratch'}  ")

    config = get_library_config()

    assert config.rom_directory == (tmp_path / "roms").resolve()
    assert config.tmp_directory == (tmp_path / "scratch").resolve()


def test_blank_environment_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROMKEEPER_ROM_DIRECTORY", "   ")

    assert env_path("ROMKEEPER_ROM_DIRECTORY", Path("/srv/roms")) == Path("/srv/roms")


def test_system_and_trash_directories(tmp_path: Path) -> None:
    config = LibraryConfig(rom_directory=tmp_path / "roms", tmp_directory=tmp_path / "scratch")

    config.ensure_directories()

    assert config.rom_directory.is_dir()
    assert config.tmp_directory.is_dir()
    assert config.trash_directory("Sony - PlayStation") == (
        tmp_path / "roms" / "Sony - PlayStation" / TRASH_DIRECTORY_NAME
    )

