"""Test configuration and fixtures."""

import io
import struct
from typing import List, Optional, Sequence, Tuple, Union

import pytest

# (layer_delta, instrument, key, velocity, panning, pitch)
BlockRow = Tuple[int, int, int, int, int, int]
# (tick_delta, blocks)
TickRow = Tuple[int, Sequence[BlockRow]]

BASIC_HEADER = {
    "zeroes": 0,
    "version": 5,
    "instrument_count": 16,
    "song_length": 11,
    "layer_count": 4,
    "song_name": "Test Song",
    "song_author": "DGigsTV",
    "original_song_author": "DGigsTV",
    "song_description": "This is a test song! https://github.com/dgigstv",
    "song_tempo": 500,
    "auto_save": 0,
    "auto_save_duration": 10,
    "time_signature": 4,
    "minutes_spent": 3,
    "left_clicks": 120,
    "right_clicks": 7,
    "note_blocks_added": 40,
    "note_blocks_removed": 36,
    "import_file_name": "",
    "loop": 1,
    "max_loop_count": 0,
    "loop_start_tick": 2,
}

# Notes at ticks 0 (layers 0 and 2), 2 (layer 0) and 10 (layer 3).
# Tick 5 is present in the file but holds no note blocks.
BASIC_GRID: List[TickRow] = [
    (1, [(1, 0, 45, 100, 100, 0), (2, 2, 33, 50, 0, -50)]),
    (2, [(1, 1, 40, 75, 120, 25)]),
    (3, []),
    (5, [(4, 15, 87, 100, 100, 0)]),
]


def pascal(value: Union[str, bytes, None], length: Optional[int] = None) -> bytes:
    """Encode a length-prefixed string. None encodes an absent string."""
    if value is None:
        payload = b""
    elif isinstance(value, bytes):
        payload = value
    else:
        payload = value.encode("utf-8")

    prefix = len(payload) if length is None else length
    return struct.pack("<i", prefix) + payload


def build_header(**overrides) -> bytes:
    """Build header bytes from BASIC_HEADER with field overrides."""
    h = dict(BASIC_HEADER, **overrides)

    return b"".join(
        [
            struct.pack(
                "<hbbhh",
                h["zeroes"],
                h["version"],
                h["instrument_count"],
                h["song_length"],
                h["layer_count"],
            ),
            pascal(h["song_name"]),
            pascal(h["song_author"]),
            pascal(h["original_song_author"]),
            pascal(h["song_description"]),
            struct.pack(
                "<hbbb",
                h["song_tempo"],
                h["auto_save"],
                h["auto_save_duration"],
                h["time_signature"],
            ),
            struct.pack(
                "<iiiii",
                h["minutes_spent"],
                h["left_clicks"],
                h["right_clicks"],
                h["note_blocks_added"],
                h["note_blocks_removed"],
            ),
            pascal(h["import_file_name"]),
            struct.pack("<bbh", h["loop"], h["max_loop_count"], h["loop_start_tick"]),
        ]
    )


def build_grid(ticks: Sequence[TickRow]) -> bytes:
    """Build the delta-encoded note block section, including terminators."""
    out = bytearray()

    for tick_delta, blocks in ticks:
        out += struct.pack("<h", tick_delta)
        for layer_delta, instrument, key, velocity, panning, pitch in blocks:
            out += struct.pack(
                "<hbbbbh", layer_delta, instrument, key, velocity, panning, pitch
            )
        out += struct.pack("<h", 0)

    out += struct.pack("<h", 0)
    return bytes(out)


def build_nbs(grid: Sequence[TickRow] = BASIC_GRID, **header_overrides) -> bytes:
    return build_header(**header_overrides) + build_grid(grid)


class TrackingBytesIO(io.BytesIO):
    """In-memory source that counts close() calls."""

    def __init__(self, data: bytes = b""):
        super().__init__(data)
        self.close_count = 0

    def close(self) -> None:
        self.close_count += 1
        super().close()


@pytest.fixture
def basic_song_data():
    """Return raw bytes of the basic test song."""
    return build_nbs()


@pytest.fixture
def basic_song_file(tmp_path, basic_song_data):
    """Return path to the basic test song written to disk."""
    path = tmp_path / "BasicTestSong.nbs"
    path.write_bytes(basic_song_data)
    return path
