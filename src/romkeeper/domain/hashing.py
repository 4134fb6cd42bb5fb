"""Streaming size/digest computation.

Digests follow the conventions of the preservation datasets: lowercase hex, no
separators, CRC32 zero-padded to eight digits.
"""

from __future__ import annotations

import hashlib
import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Final, Protocol

from romkeeper.domain.model import Fingerprint, HashAlgorithm

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CHUNK_SIZE: Final[int] = 1024 * 1024


class _Accumulator(Protocol):
    def update(self, data: bytes, /) -> None: ...

    def hexdigest(self) -> str: ...


class _Crc32:
    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = 0

    def update(self, data: bytes, /) -> None:
        self._value = zlib.crc32(data, self._value)

    def hexdigest(self) -> str:
        return f"{self._value & 0xFFFFFFFF:08x}"


def new_accumulator(algorithm: HashAlgorithm) -> _Accumulator:
    match algorithm:
        case HashAlgorithm.CRC:
            return _Crc32()
        case HashAlgorithm.MD5:
            return hashlib.md5()  # noqa: S324
        case HashAlgorithm.SHA1:
            return hashlib.sha1()  # noqa: S324


@dataclass(frozen=True, slots=True)
class HashEngine:
    """Compute ``Fingerprint`` values without buffering whole files."""

    chunk_size: int = DEFAULT_CHUNK_SIZE

    def hash_stream(
        self,
        stream: BinaryIO,
        *,
        algorithm: HashAlgorithm,
        header_size: int = 0,
    ) -> Fingerprint:
        """Hash ``stream`` from its current position.

        The first ``header_size`` bytes count towards neither size nor digest.
        """

        skipped = 0
        while skipped < header_size:
            chunk = stream.read(min(self.chunk_size, header_size - skipped))
            if not chunk:
                break
            skipped += len(chunk)

        accumulator = new_accumulator(algorithm)
        size = 0
        while chunk := stream.read(self.chunk_size):
            accumulator.update(chunk)
            size += len(chunk)
        return Fingerprint(size=size, digest=accumulator.hexdigest())

    def hash_file(
        self,
        path: Path,
        *,
        algorithm: HashAlgorithm,
        header_size: int = 0,
    ) -> Fingerprint:
        with path.open("rb") as handle:
            return self.hash_stream(handle, algorithm=algorithm, header_size=header_size)
