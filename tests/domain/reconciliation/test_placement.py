from __future__ import annotations

from pathlib import Path

import pytest

from romkeeper.domain.model import Game, Rom, System
from romkeeper.domain.reconciliation.placement import (
    archive_destination,
    extension_of,
    image_destination,
    rom_destination,
    with_extension,
)

ROOT = Path("/library/Sony - PlayStation 3")


def _rom(name: str, rom_id: int = 1) -> Rom:
    return Rom(id=rom_id, game_id=1, name=name, size=1, crc="00000000")


def test_plain_rom_is_filed_under_its_name() -> None:
    system = System(id=1, name="Sony - PlayStation 3")
    game = Game(id=1, system_id=1, name="Game (USA)")

    assert rom_destination(ROOT, system, game, _rom("Game (USA).iso")) == ROOT / "Game (USA).iso"


@pytest.mark.parametrize(("arcade", "jbfolder"), [(True, False), (False, True)])
def test_arcade_and_jbfolder_roms_get_a_game_directory(arcade: bool, jbfolder: bool) -> None:  # noqa: FBT001
    system = System(id=1, name="MAME", arcade=arcade)
    game = Game(id=1, system_id=1, name="pacman", jbfolder=jbfolder)

    destination = rom_destination(ROOT, system, game, _rom("pacman.6e"))

    assert destination == ROOT / "pacman" / "pacman.6e"


@pytest.mark.parametrize("extension", ["pkg", "rap"])
def test_updates_are_named_after_the_game(extension: str) -> None:
    system = System(id=1, name="Sony - PlayStation 3")
    game = Game(id=1, system_id=1, name="Game (USA) (Update 1.01)")

    destination = rom_destination(ROOT, system, game, _rom(f"UP0001-BLUS00000_00-X.{extension}"))

    assert destination == ROOT / f"Game (USA) (Update 1.01).{extension}"


def test_single_rom_archive_takes_the_rom_name_with_archive_extension() -> None:
    system = System(id=1, name="Sega - Mega Drive")
    game = Game(id=1, system_id=1, name="Sonic")

    destination = archive_destination(ROOT, system, game, [_rom("Sonic (World).md")], "7z")

    assert destination == ROOT / "Sonic (World).7z"


def test_multi_rom_archive_takes_the_game_name() -> None:
    system = System(id=1, name="Sega - Mega Drive")
    game = Game(id=1, system_id=1, name="Sonic & Knuckles")

    destination = archive_destination(
        ROOT,
        system,
        game,
        [_rom("a.bin", 1), _rom("b.bin", 2)],
        "zip",
    )

    assert destination == ROOT / "Sonic & Knuckles.zip"


def test_arcade_single_rom_archive_takes_the_game_name() -> None:
    system = System(id=1, name="MAME", arcade=True)
    game = Game(id=1, system_id=1, name="pacman")

    assert archive_destination(ROOT, system, game, [_rom("pacman.6e")], "zip") == ROOT / "pacman.zip"


def test_image_destination_swaps_the_extension() -> None:
    assert image_destination(ROOT, _rom("Game (Europe).iso"), "cso") == ROOT / "Game (Europe).cso"


def test_extension_helpers() -> None:
    assert extension_of("Game.ZIP") == "zip"
    assert extension_of("noextension") == ""
    assert with_extension(Path("dir/Game (USA).cue"), "chd") == Path("dir/Game (USA).chd")
