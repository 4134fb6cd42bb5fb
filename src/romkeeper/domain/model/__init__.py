"""Public domain model surface."""

from __future__ import annotations

from romkeeper.domain.model.base import Entity
from romkeeper.domain.model.catalog import Game, Header, Rom, Romfile, Setting, System
from romkeeper.domain.model.enums import ContainerKind, HashAlgorithm
from romkeeper.domain.model.primitives import ContainerEntry, Fingerprint

__all__ = [
    "ContainerEntry",
    "ContainerKind",
    "Entity",
    "Fingerprint",
    "Game",
    "HashAlgorithm",
    "Header",
    "Rom",
    "Romfile",
    "Setting",
    "System",
]
