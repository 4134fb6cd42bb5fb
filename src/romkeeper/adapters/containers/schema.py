"""Pydantic models describing ``7z l -slt`` technical listings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from romkeeper.domain.model import ContainerEntry

LISTING_SEPARATOR = "----------"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SevenZipBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SevenZipEntry(SevenZipBaseModel):
    path: str = Field(alias="Path")
    size: int = Field(default=0, alias="Size")
    crc: str | None = Field(default=None, alias="CRC")
    folder: str | None = Field(default=None, alias="Folder")
    attributes: str | None = Field(default=None, alias="Attributes")

    _normalize_crc = field_validator("crc", mode="before")(_blank_to_none)
    _normalize_folder = field_validator("folder", "attributes", mode="before")(_blank_to_none)

    @field_validator("size", mode="before")
    @classmethod
    def _parse_size(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value

    @property
    def is_directory(self) -> bool:
        return self.folder == "+" or (self.attributes or "").startswith("D")

    def to_entry(self) -> ContainerEntry:
        return ContainerEntry(
            name=self.path,
            size=self.size,
            crc=self.crc.lower() if self.crc else None,
        )


def _blocks(lines: list[str]) -> list[dict[str, str]]:
    blocks: list[dict[str, str]] = []
    current: dict[str, str] = {}
    for line in lines:
        if not line.strip():
            if current:
                blocks.append(current)
                current = {}
            continue
        key, separator, value = line.partition(" = ")
        if separator:
            current[key.strip()] = value
        elif line.rstrip().endswith(" ="):
            current[line.rstrip()[:-2].strip()] = ""
    if current:
        blocks.append(current)
    return blocks


def parse_listing(stdout: str) -> list[SevenZipEntry]:
    """Parse the member blocks following the archive header of a ``-slt`` listing.

    Directory members are dropped; files keep their listing order.
    """

    lines = stdout.splitlines()
    try:
        start = next(index for index, line in enumerate(lines) if line.strip() == LISTING_SEPARATOR)
    except StopIteration:
        return []
    members = (SevenZipEntry.model_validate(block) for block in _blocks(lines[start + 1 :]))
    return [member for member in members if not member.is_directory]
