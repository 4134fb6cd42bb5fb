from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from romkeeper.common import (
    disk_size,
    free_path,
    move_file,
    prune_empty_directories,
    scratch_directory,
)


def test_move_file_creates_parents_and_reports_no_op(tmp_path: Path) -> None:
    source = tmp_path / "in" / "game.bin"
    source.parent.mkdir()
    source.write_bytes(b"data")
    destination = tmp_path / "library" / "System" / "Game.bin"

    assert move_file(source, destination) is True
    assert move_file(destination, destination) is False
    assert destination.read_bytes() == b"data"
    assert not source.exists()


def test_move_file_never_replaces_an_existing_destination(tmp_path: Path) -> None:
    source = tmp_path / "hack.bin"
    source.write_bytes(b"second")
    destination = tmp_path / "Trash" / "hack.bin"
    destination.parent.mkdir()
    destination.write_bytes(b"first")

    with pytest.raises(FileExistsError):
        move_file(source, destination)

    assert source.read_bytes() == b"second"
    assert destination.read_bytes() == b"first"


def test_free_path_numbers_taken_names(tmp_path: Path) -> None:
    (tmp_path / "hack.bin").write_bytes(b"")

    assert free_path(tmp_path / "other.bin") == tmp_path / "other.bin"
    assert free_path(tmp_path / "hack.bin") == tmp_path / "hack (1).bin"
    assert free_path(tmp_path / "hack.bin", {tmp_path / "hack (1).bin"}) == tmp_path / "hack (2).bin"


def test_disk_size_sums_directories(tmp_path: Path) -> None:
    (tmp_path / "PS3_GAME" / "USRDIR").mkdir(parents=True)
    (tmp_path / "PS3_DISC.SFB").write_bytes(b"12345")
    (tmp_path / "PS3_GAME" / "USRDIR" / "EBOOT.BIN").write_bytes(b"123")

    assert disk_size(tmp_path) == 8
    assert disk_size(tmp_path / "PS3_DISC.SFB") == 5


def test_prune_keeps_directories_with_files(tmp_path: Path) -> None:
    root = tmp_path / "BLUS00000"
    (root / "PS3_GAME" / "USRDIR").mkdir(parents=True)
    (root / "PS3_GAME" / "TROPDIR").mkdir()
    (root / "PS3_GAME" / "TROPDIR" / "left.dat").write_bytes(b"")

    prune_empty_directories(root)

    assert not (root / "PS3_GAME" / "USRDIR").exists()
    assert (root / "PS3_GAME" / "TROPDIR" / "left.dat").exists()

    (root / "PS3_GAME" / "TROPDIR" / "left.dat").unlink()
    prune_empty_directories(root)

    assert not root.exists()


def test_scratch_directory_is_removed_on_exit(tmp_path: Path) -> None:
    with scratch_directory(tmp_path / "scratch") as scratch:
        (scratch / "decoded.iso").write_bytes(b"iso")
        assert scratch.parent == tmp_path / "scratch"

    assert not scratch.exists()
    assert (tmp_path / "scratch").is_dir()
