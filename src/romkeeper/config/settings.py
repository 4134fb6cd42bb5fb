"""Persisted catalog settings and their validation."""

from __future__ import annotations

from typing import Final

from romkeeper.domain.model import HashAlgorithm

from .errors import ConfigurationError

HASH_ALGORITHM_KEY: Final[str] = "HASH_ALGORITHM"
DEFAULT_HASH_ALGORITHM: Final[HashAlgorithm] = HashAlgorithm.CRC


def parse_hash_algorithm(value: str) -> HashAlgorithm:
    try:
        return HashAlgorithm(value.strip().upper())
    except ValueError as exc:
        choices = ", ".join(algorithm.value for algorithm in HashAlgorithm)
        raise ConfigurationError(
            f"Unsupported hash algorithm {value!r} (expected one of: {choices})"
        ) from exc


def resolve_hash_algorithm(override: str | None, stored: str | None) -> HashAlgorithm:
    """Pick the command-line override first, then the persisted setting, then CRC."""

    if override is not None:
        return parse_hash_algorithm(override)
    if stored is not None:
        return parse_hash_algorithm(stored)
    return DEFAULT_HASH_ALGORITHM
