from __future__ import annotations

from pathlib import Path

from romkeeper.adapters.containers import (
    ChdAdapter,
    ContainerRegistry,
    CsoAdapter,
    PlainFileAdapter,
    RvzAdapter,
    SevenZipAdapter,
    detect_container_registry,
)
from romkeeper.domain.model import ContainerKind


def test_detects_installed_tools_and_marks_the_rest_missing() -> None:
    installed = {"7z": "/usr/bin/7z", "chdman": "/opt/mame/chdman"}

    registry = detect_container_registry(which=installed.get)

    archive = registry.adapter_for(Path("Game.ZIP"))
    image = registry.adapter_for(Path("Game.chd"))
    assert isinstance(archive, SevenZipAdapter)
    assert archive.executable == "/usr/bin/7z"
    assert isinstance(image, ChdAdapter)
    assert registry.adapter_for(Path("Game.cso")) is None
    assert registry.missing_tool_for(Path("Game.cso")) == "maxcso"
    assert registry.missing_tool_for(Path("Game.rvz")) == "dolphin-tool"


def test_unknown_extensions_fall_back_to_plain_files() -> None:
    registry = ContainerRegistry()

    adapter = registry.adapter_for(Path("Sonic (World).md"))

    assert isinstance(adapter, PlainFileAdapter)
    assert adapter.kind is ContainerKind.PLAIN
    assert registry.missing_tool_for(Path("Sonic (World).md")) is None


def test_registering_clears_missing_mark() -> None:
    registry = ContainerRegistry()
    registry.mark_missing("maxcso", CsoAdapter.extensions)

    registry.register(CsoAdapter("/usr/local/bin/maxcso"))

    assert isinstance(registry.adapter_for(Path("game.cso")), CsoAdapter)
    assert registry.missing_tool_for(Path("game.cso")) is None


def test_image_adapters_compose_decode_commands(tmp_path: Path) -> None:
    source = tmp_path / "Game.rvz"
    target = tmp_path / "Game.iso"

    assert RvzAdapter("dolphin-tool").decode_command(source, target) == [
        "dolphin-tool",
        "convert",
        "-f",
        "iso",
        "-i",
        str(source),
        "-o",
        str(target),
    ]
    assert CsoAdapter("maxcso").decode_command(source, target) == [
        "maxcso",
        "--decompress",
        str(source),
        "-o",
        str(target),
    ]
