from __future__ import annotations

import pytest

from romkeeper.config import ConfigurationError
from romkeeper.config.settings import parse_hash_algorithm, resolve_hash_algorithm
from romkeeper.domain.model import HashAlgorithm


@pytest.mark.parametrize(
    ("override", "stored", "expected"),
    [
        (None, None, HashAlgorithm.CRC),
        (None, "sha1", HashAlgorithm.SHA1),
        ("md5", "SHA1", HashAlgorithm.MD5),
    ],
)
def test_override_then_stored_then_crc(
    override: str | None,
    stored: str | None,
    expected: HashAlgorithm,
) -> None:
    assert resolve_hash_algorithm(override, stored) is expected


def test_unknown_algorithm_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        parse_hash_algorithm("sha256")

    assert "CRC, MD5, SHA1" in str(excinfo.value)
