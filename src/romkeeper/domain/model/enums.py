"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class HashAlgorithm(StrEnum):
    """Digest conventions used by preservation datasets."""

    CRC = "CRC"
    MD5 = "MD5"
    SHA1 = "SHA1"


class ContainerKind(StrEnum):
    """Families of containers a rom file can arrive in."""

    PLAIN = "plain"
    ARCHIVE = "archive"
    TRACKED_IMAGE = "tracked_image"
    IMAGE = "image"
