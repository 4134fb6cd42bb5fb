from __future__ import annotations

import hashlib
import io
import zlib
from typing import TYPE_CHECKING

import pytest

from romkeeper.domain.hashing import HashEngine
from romkeeper.domain.model import Fingerprint, HashAlgorithm

if TYPE_CHECKING:
    from pathlib import Path


def test_crc_is_lowercase_and_zero_padded() -> None:
    content = b"\x00"
    expected = f"{zlib.crc32(content):08x}"

    fingerprint = HashEngine().hash_stream(io.BytesIO(content), algorithm=HashAlgorithm.CRC)

    assert fingerprint == Fingerprint(size=1, digest=expected)
    assert len(fingerprint.digest) == 8
    assert fingerprint.digest == fingerprint.digest.lower()


@pytest.mark.parametrize(
    ("algorithm", "digest"),
    [
        (HashAlgorithm.MD5, hashlib.md5(b"payload").hexdigest()),  # noqa: S324
        (HashAlgorithm.SHA1, hashlib.sha1(b"payload").hexdigest()),  # noqa: S324
    ],
)
def test_hashlib_algorithms(algorithm: HashAlgorithm, digest: str) -> None:
    fingerprint = HashEngine().hash_stream(io.BytesIO(b"payload"), algorithm=algorithm)

    assert fingerprint == Fingerprint(size=7, digest=digest)


def test_header_bytes_are_excluded_from_size_and_digest() -> None:
    header = b"H" * 16
    body = b"the actual rom body"
    engine = HashEngine(chunk_size=5)

    with_header = engine.hash_stream(
        io.BytesIO(header + body),
        algorithm=HashAlgorithm.CRC,
        header_size=16,
    )
    without_header = engine.hash_stream(io.BytesIO(body), algorithm=HashAlgorithm.CRC)

    assert with_header == without_header
    assert with_header.size == len(body)


def test_input_shorter_than_header_hashes_as_empty() -> None:
    fingerprint = HashEngine().hash_stream(
        io.BytesIO(b"short"),
        algorithm=HashAlgorithm.CRC,
        header_size=512,
    )

    assert fingerprint == Fingerprint(size=0, digest="00000000")


def test_small_chunks_give_the_same_digest(tmp_path: Path) -> None:
    path = tmp_path / "rom.bin"
    path.write_bytes(bytes(range(256)) * 40)

    chunked = HashEngine(chunk_size=7).hash_file(path, algorithm=HashAlgorithm.SHA1)
    whole = HashEngine().hash_file(path, algorithm=HashAlgorithm.SHA1)

    assert chunked == whole
    assert chunked.size == 256 * 40
