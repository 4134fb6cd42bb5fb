"""Interactive terminal decisions plugged into the reconciliation flows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from romkeeper.domain.model import Rom, System
    from romkeeper.domain.reconciliation import PendingMove, RomCandidate

log = logging.getLogger(__name__)

type Reader = Callable[[str], str]


def _ask(prompt: str, reader: Reader) -> str | None:
    try:
        return reader(prompt).strip()
    except EOFError:
        return None


def _pick_index(count: int, prompt: str, reader: Reader) -> int | None:
    while True:
        answer = _ask(prompt, reader)
        if not answer:
            return None
        if answer.isdigit() and 1 <= int(answer) <= count:
            return int(answer) - 1
        print(f"Please enter a number between 1 and {count}, or nothing to skip")


def choose_system(systems: Sequence[System], reader: Reader = input) -> System | None:
    for index, system in enumerate(systems, start=1):
        print(f"{index:>3}. {system.name}")
    chosen = _pick_index(len(systems), "Please select a system: ", reader)
    return systems[chosen] if chosen is not None else None


def choose_rom(candidates: Sequence[RomCandidate], reader: Reader = input) -> Rom | None:
    """Ask which of several identical roms a file should be filed as."""

    for index, candidate in enumerate(candidates, start=1):
        print(f"{index:>3}. {candidate.rom.name} ({candidate.game.name})")
    chosen = _pick_index(len(candidates), "Please select a rom: ", reader)
    return candidates[chosen].rom if chosen is not None else None


def confirm_moves(moves: Sequence[PendingMove], reader: Reader = input) -> bool:
    for move in moves:
        print(f"{move.romfile.path} -> {move.destination}")
    answer = _ask(f"Move {len(moves)} invalid file(s) to trash? [y/N] ", reader)
    return (answer or "").lower() in {"y", "yes"}
