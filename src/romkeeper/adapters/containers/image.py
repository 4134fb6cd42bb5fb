"""Shared behaviour of containers holding exactly one decodable disk image."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from romkeeper.domain.model import ContainerEntry, ContainerKind
from romkeeper.domain.reconciliation.errors import DecodeError

from .process import run_tool

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

DECODED_EXTENSION = "iso"


class SingleImageAdapter:
    """One virtual entry, named after the image with the decoded extension.

    The declared size is unknown until decoding, so entries carry the container
    size and no CRC; identity always comes from hashing the decoded output.
    """

    kind: ClassVar[ContainerKind] = ContainerKind.IMAGE
    extensions: ClassVar[frozenset[str]] = frozenset()
    decoded_extension: ClassVar[str] = DECODED_EXTENSION

    def decode_command(self, path: Path, target: Path) -> list[str]:
        raise NotImplementedError

    def list_entries(self, path: Path) -> list[ContainerEntry]:
        name = f"{path.stem}.{self.decoded_extension}"
        return [ContainerEntry(name=name, size=path.stat().st_size)]

    def materialize(
        self,
        path: Path,
        entries: Sequence[ContainerEntry],
        scratch: Path,
    ) -> list[Path]:
        if not entries:
            return []
        if len(entries) != 1:
            raise DecodeError(path, [], f"{len(entries)} entries requested from a single image")
        target = scratch / entries[0].name
        command = self.decode_command(path, target)
        run_tool(command, path=path)
        if not target.is_file():
            raise DecodeError(path, command, f"{target.name} was not written")
        return [target]
