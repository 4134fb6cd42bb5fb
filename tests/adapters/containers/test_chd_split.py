from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from romkeeper.adapters.containers import split_tracks
from romkeeper.domain.reconciliation import TrackLayoutError

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def image(tmp_path: Path) -> Path:
    path = tmp_path / "disc.bin"
    path.write_bytes(b"A" * 100 + b"B" * 50 + b"C" * 7)
    return path


def test_tracks_are_cut_in_declared_order(image: Path, tmp_path: Path) -> None:
    tracks = split_tracks(
        image,
        [("Disc (Track 1).bin", 100), ("Disc (Track 2).bin", 50), ("Disc (Track 3).bin", 7)],
        tmp_path / "scratch",
        source=tmp_path / "disc.chd",
    )

    assert [track.name for track in tracks] == [
        "Disc (Track 1).bin",
        "Disc (Track 2).bin",
        "Disc (Track 3).bin",
    ]
    assert [track.read_bytes() for track in tracks] == [b"A" * 100, b"B" * 50, b"C" * 7]


@pytest.mark.parametrize(
    "sizes",
    [
        [100, 50],
        [100, 50, 8],
        [],
    ],
)
def test_sizes_must_cover_the_image_exactly(
    image: Path,
    tmp_path: Path,
    sizes: list[int],
) -> None:
    tracks = [(f"track{index}.bin", size) for index, size in enumerate(sizes)]

    with pytest.raises(TrackLayoutError) as excinfo:
        split_tracks(image, tracks, tmp_path / "scratch", source=tmp_path / "disc.chd")

    assert excinfo.value.path == tmp_path / "disc.chd"
