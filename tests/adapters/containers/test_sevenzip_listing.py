from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import pytest

from romkeeper.adapters.containers import SevenZipAdapter, parse_listing, run_tool
from romkeeper.domain.model import ContainerEntry
from romkeeper.domain.reconciliation import DecodeError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

LISTING = """
7-Zip [64] 17.05 : Copyright (c) 1999-2021 Igor Pavlov : 2017-08-28

Listing archive: collection.7z

--
Path = collection.7z
Type = 7z
Physical Size = 4242
Headers Size = 210
Method = LZMA2:24
Solid = +
Blocks = 1

----------
Path = roms
Size = 0
Packed Size = 0
Modified = 2020-01-01 00:00:00
Attributes = D_ drwxr-xr-x
CRC =
Encrypted = -

Path = roms/Sonic (World).md
Size = 524288
Packed Size = 4032
Modified = 2020-01-01 00:00:00
Attributes = A_ -rw-r--r--
CRC = F9394E97
Encrypted = -
Method = LZMA2:24
Block = 0

Path = empty.txt
Size =
Packed Size =
Modified = 2020-01-01 00:00:00
Attributes = A_ -rw-r--r--
CRC =
Encrypted = -
"""


class _Completed:
    def __init__(self, returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_listing_drops_directories_and_lowercases_crc() -> None:
    members = parse_listing(LISTING)

    assert [member.to_entry() for member in members] == [
        ContainerEntry(name="roms/Sonic (World).md", size=524288, crc="f9394e97"),
        ContainerEntry(name="empty.txt", size=0, crc=None),
    ]


def test_listing_without_member_section_is_empty() -> None:
    assert parse_listing("7-Zip 17.05\n\nError: cannot open file\n") == []


def test_run_tool_returns_stdout(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[Sequence[str]] = []

    def fake_run(command: Sequence[str], **kwargs: object) -> _Completed:
        seen.append(command)
        assert kwargs["check"] is False
        return _Completed(0, stdout="ok")

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert run_tool(["7z", "l", "--", "a.7z"], path=tmp_path / "a.7z") == "ok"
    assert seen == [["7z", "l", "--", "a.7z"]]


def test_run_tool_failure_carries_stderr(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda *_args, **_kwargs: _Completed(2, stderr="ERROR: Data Error : roms/a.md\n"),
    )

    with pytest.raises(DecodeError) as excinfo:
        run_tool(["7z", "x", "--", "a.7z"], path=tmp_path / "a.7z")

    assert excinfo.value.message == "ERROR: Data Error : roms/a.md"
    assert excinfo.value.command == ("7z", "x", "--", "a.7z")


def test_run_tool_missing_executable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(*_args: object, **_kwargs: object) -> _Completed:
        raise FileNotFoundError("7z")

    monkeypatch.setattr(subprocess, "run", fake_run)

    with pytest.raises(DecodeError, match="7z not found"):
        run_tool(["7z", "l", "--", "a.7z"], path=tmp_path / "a.7z")


def test_adapter_lists_and_renames_through_the_tool(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    commands: list[list[str]] = []

    def fake_run(command: list[str], **_kwargs: object) -> _Completed:
        commands.append(command)
        return _Completed(0, stdout=LISTING)

    monkeypatch.setattr(subprocess, "run", fake_run)
    archive = tmp_path / "collection.7z"
    adapter = SevenZipAdapter("/usr/bin/7z")

    entries = adapter.list_entries(archive)
    adapter.rename_entry(archive, "empty.txt", "readme.txt")

    assert len(entries) == 2
    assert commands == [
        ["/usr/bin/7z", "l", "-slt", "--", str(archive)],
        ["/usr/bin/7z", "rn", "--", str(archive), "empty.txt", "readme.txt"],
    ]


def test_extraction_must_produce_every_entry(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setattr(subprocess, "run", lambda *_args, **_kwargs: _Completed(0))
    scratch = tmp_path / "scratch"
    scratch.mkdir()

    with pytest.raises(DecodeError, match="was not extracted"):
        SevenZipAdapter().materialize(
            tmp_path / "collection.7z",
            [ContainerEntry(name="roms/Sonic (World).md", size=524288)],
            scratch,
        )
