"""Shared reconciliation contract components.

This module intentionally holds only:
- per-entry resolution variants produced by the match resolver
- outcome records produced by the import and check flows
- the injectable decision callables (disambiguation, confirmation)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from pathlib import Path

    from romkeeper.domain.model import ContainerEntry, Fingerprint, Game, Rom, Romfile


class ResolutionStatus(StrEnum):
    """Outcome of matching one container entry against the catalog."""

    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"
    ALREADY_FILED = "already_filed"


@dataclass(frozen=True, slots=True)
class RomCandidate:
    """A catalog rom offered for disambiguation, with its game for display."""

    rom: Rom
    game: Game


@dataclass(slots=True, kw_only=True)
class MatchedResolution:
    """Entry resolved to exactly one unfiled rom."""

    entry: ContainerEntry
    fingerprint: Fingerprint
    rom: Rom
    game: Game
    reason: str | None = None
    status: Literal[ResolutionStatus.MATCHED] = ResolutionStatus.MATCHED


@dataclass(slots=True, kw_only=True)
class AmbiguousResolution:
    """Entry matched several roms and no decision picked one."""

    entry: ContainerEntry
    fingerprint: Fingerprint
    candidates: tuple[RomCandidate, ...]
    reason: str | None = None
    status: Literal[ResolutionStatus.AMBIGUOUS] = ResolutionStatus.AMBIGUOUS

    def __post_init__(self) -> None:
        if len(self.candidates) < 2:
            raise ValueError("Ambiguous resolution must include at least two candidates")


@dataclass(slots=True, kw_only=True)
class NoMatchResolution:
    """No catalog rom has this size and digest."""

    entry: ContainerEntry
    fingerprint: Fingerprint
    reason: str | None = None
    status: Literal[ResolutionStatus.NO_MATCH] = ResolutionStatus.NO_MATCH


@dataclass(slots=True, kw_only=True)
class AlreadyFiledResolution:
    """The matching rom is already backed by another file."""

    entry: ContainerEntry
    fingerprint: Fingerprint
    rom: Rom
    romfile: Romfile | None
    reason: str | None = None
    status: Literal[ResolutionStatus.ALREADY_FILED] = ResolutionStatus.ALREADY_FILED


type EntryResolution = (
    MatchedResolution | AmbiguousResolution | NoMatchResolution | AlreadyFiledResolution
)

type Disambiguator = Callable[[Sequence[RomCandidate]], Rom | None]
type FingerprintEntry = Callable[[ContainerEntry], Fingerprint]


class ImportStatus(StrEnum):
    PLACED = "placed"
    QUARANTINED = "quarantined"
    SKIPPED = "skipped"


@dataclass(slots=True, kw_only=True)
class ImportOutcome:
    """What happened to one top-level input."""

    source: Path
    status: ImportStatus
    destinations: tuple[Path, ...] = ()
    reason: str | None = None


@dataclass(slots=True)
class ImportReport:
    outcomes: list[ImportOutcome] = field(default_factory=list["ImportOutcome"])

    def add(self, outcome: ImportOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, status: ImportStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)


class VerificationStatus(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    MISSING = "missing"
    UNCHECKED = "unchecked"


@dataclass(slots=True, kw_only=True)
class Verification:
    romfile: Romfile
    status: VerificationStatus
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class PendingMove:
    """An invalid romfile waiting for confirmation before it goes to the trash."""

    romfile: Romfile
    destination: Path


type Confirmation = Callable[[Sequence[PendingMove]], bool]


@dataclass(slots=True, kw_only=True)
class CheckReport:
    system_name: str
    verifications: list[Verification] = field(default_factory=list["Verification"])
    moves: list[PendingMove] = field(default_factory=list["PendingMove"])
    confirmed: bool = False

    def count(self, status: VerificationStatus) -> int:
        return sum(1 for item in self.verifications if item.status is status)
