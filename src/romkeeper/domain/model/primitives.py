"""Small value objects shared by hashing, containers and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Fingerprint(NamedTuple):
    """Identity key of some content: byte length plus lowercase hex digest."""

    size: int
    digest: str


@dataclass(frozen=True, slots=True)
class ContainerEntry:
    """Named member of a container as reported by its listing.

    ``crc`` is only set when the container format records it for free.
    """

    name: str
    size: int
    crc: str | None = None
