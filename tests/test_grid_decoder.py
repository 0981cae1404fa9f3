"""Tests for the tick grid decoder."""

import io
import logging
import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import BASIC_GRID, TrackingBytesIO, build_grid
from nbsreader.errors import ShortReadError
from nbsreader.formats.nbs.grid_decoder import GridState, TickGridDecoder, TickStream
from nbsreader.models.song import NoteBlock
from nbsreader.utils.cursor import ByteCursor


def decoder_for(data: bytes) -> TickGridDecoder:
    return TickGridDecoder(ByteCursor(io.BytesIO(data)))


class TestTickGridDecoder:
    """Test cases for the grid state machine."""

    def test_run_basic_grid(self):
        """Test decoding the basic grid eagerly."""
        ticks = decoder_for(build_grid(BASIC_GRID)).run()

        assert [t.tick for t in ticks] == [0, 2, 10]
        assert ticks[0].layers == [
            NoteBlock(
                instrument=0, key=45, velocity=100, panning=100, pitch=0, layer=0, noteblock_id=0
            ),
            NoteBlock(
                instrument=2, key=33, velocity=50, panning=0, pitch=-50, layer=2, noteblock_id=1
            ),
        ]
        assert ticks[1].layers == [
            NoteBlock(
                instrument=1, key=40, velocity=75, panning=120, pitch=25, layer=0, noteblock_id=2
            ),
        ]
        assert ticks[2].layers == [
            NoteBlock(
                instrument=15, key=87, velocity=100, panning=100, pitch=0, layer=3, noteblock_id=3
            ),
        ]

    def test_empty_grid(self):
        """Test that a leading zero tick delta yields no ticks and no error."""
        decoder = decoder_for(build_grid([]))

        assert decoder.run() == []
        assert decoder.state is GridState.DONE

    def test_empty_ticks_skipped(self):
        """Test that ticks without note blocks never appear."""
        grid = [(1, []), (1, []), (3, [(1, 0, 1, 2, 3, 4)]), (2, [])]
        ticks = decoder_for(build_grid(grid)).run()

        assert len(ticks) == 1
        assert ticks[0].tick == 4

    def test_only_empty_ticks(self):
        """Test a grid where every tick is empty."""
        assert decoder_for(build_grid([(1, []), (4, [])])).run() == []

    def test_noteblock_ids_contiguous(self):
        """Test that ids count across tick boundaries without resetting."""
        grid = [
            (1, [(1, 0, 0, 0, 0, 0), (1, 0, 0, 0, 0, 0), (1, 0, 0, 0, 0, 0)]),
            (1, []),
            (1, [(5, 0, 0, 0, 0, 0)]),
            (7, [(2, 0, 0, 0, 0, 0), (3, 0, 0, 0, 0, 0)]),
        ]
        ticks = decoder_for(build_grid(grid)).run()

        ids = [block.noteblock_id for tick in ticks for block in tick.layers]
        assert ids == list(range(6))

    def test_ordering(self):
        """Test strictly increasing ticks and layers."""
        grid = [
            (3, [(2, 0, 0, 0, 0, 0), (1, 0, 0, 0, 0, 0), (10, 0, 0, 0, 0, 0)]),
            (1, [(1, 0, 0, 0, 0, 0)]),
            (300, [(4, 0, 0, 0, 0, 0), (4, 0, 0, 0, 0, 0)]),
        ]
        ticks = decoder_for(build_grid(grid)).run()

        tick_indices = [t.tick for t in ticks]
        assert tick_indices == [2, 3, 303]
        assert tick_indices == sorted(set(tick_indices))

        assert [b.layer for b in ticks[0].layers] == [1, 2, 12]
        assert [b.layer for b in ticks[2].layers] == [3, 7]

    def test_step_one_tick_at_a_time(self):
        """Test the single-step driver."""
        decoder = decoder_for(build_grid(BASIC_GRID))

        assert decoder.step().tick == 0
        assert decoder.state is GridState.AT_TICK
        assert decoder.step().tick == 2
        assert decoder.step().tick == 10
        assert decoder.step() is None
        assert decoder.done
        assert decoder.step() is None

    def test_step_stops_between_ticks(self):
        """Test that a step reads no further than the tick it returns."""
        data = build_grid(BASIC_GRID)
        decoder = decoder_for(data)

        decoder.step()

        # tick delta + 2 * (layer delta + 6 byte block) + layer terminator
        assert decoder.cursor.position == 2 + 2 * 8 + 2

    def test_step_matches_run(self):
        """Test that both drivers produce the same ticks."""
        data = build_grid(BASIC_GRID)
        stepped = []

        decoder = decoder_for(data)
        tick = decoder.step()
        while tick is not None:
            stepped.append(tick)
            tick = decoder.step()

        assert stepped == decoder_for(data).run()

    def test_signed_note_fields(self):
        """Test that note bytes decode as signed values."""
        data = build_grid([(1, [(1, 0, 0, 0, -56, -1200)])])
        block = decoder_for(data).run()[0].layers[0]

        assert block.panning == -56
        assert block.pitch == -1200

    def test_negative_tick_delta_ends_grid(self, caplog):
        """Test that a negative tick delta terminates like a zero delta."""
        data = build_grid([(1, [(1, 0, 0, 0, 0, 0)])])[:-2] + struct.pack("<h", -4)

        with caplog.at_level(logging.WARNING, logger="nbsreader"):
            ticks = decoder_for(data).run()

        assert [t.tick for t in ticks] == [0]
        assert "negative tick delta" in caplog.text

    def test_negative_layer_delta_ends_tick(self):
        """Test that a negative layer delta closes the current tick."""
        data = (
            struct.pack("<h", 1)
            + struct.pack("<hbbbbh", 1, 0, 0, 0, 0, 0)
            + struct.pack("<h", -1)
            + struct.pack("<h", 0)
        )
        ticks = decoder_for(data).run()

        assert len(ticks) == 1
        assert len(ticks[0].layers) == 1

    @pytest.mark.parametrize("cut", [1, 2, 3, 5, 10, 19, 20])
    def test_truncated_grid(self, cut):
        """Test that a grid cut short fails with a short read."""
        data = build_grid(BASIC_GRID)

        with pytest.raises(ShortReadError):
            decoder_for(data[: len(data) - cut]).run()

    def test_error_finishes_decoder(self):
        """Test that a failed step leaves the machine done."""
        decoder = decoder_for(struct.pack("<h", 1) + b"\x01")

        with pytest.raises(ShortReadError):
            decoder.step()

        assert decoder.done
        assert decoder.step() is None


class TestTickStream:
    """Test cases for the lazy tick stream."""

    def make_stream(self, data: bytes):
        source = TrackingBytesIO(data)
        return TickStream(TickGridDecoder(ByteCursor(source))), source

    def test_iterates_all_ticks(self):
        """Test draining the stream."""
        stream, source = self.make_stream(build_grid(BASIC_GRID))

        assert [t.tick for t in stream] == [0, 2, 10]
        assert stream.closed
        assert source.close_count == 1

    def test_exhausted_stream_stays_exhausted(self):
        """Test that pulling after the end keeps stopping."""
        stream, source = self.make_stream(build_grid([]))

        assert list(stream) == []
        assert list(stream) == []
        with pytest.raises(StopIteration):
            next(stream)
        assert source.close_count == 1

    def test_close_after_one_tick(self):
        """Test abandoning the stream after the first tick."""
        stream, source = self.make_stream(build_grid(BASIC_GRID))

        assert next(stream).tick == 0
        assert not stream.closed

        stream.close()
        stream.close()

        assert source.close_count == 1
        assert list(stream) == []

    def test_with_block_closes(self):
        """Test that leaving a with block closes the stream."""
        stream, source = self.make_stream(build_grid(BASIC_GRID))

        with stream:
            next(stream)

        assert source.close_count == 1

    def test_break_inside_with_block(self):
        """Test breaking out of iteration inside a with block."""
        stream, source = self.make_stream(build_grid(BASIC_GRID))

        with stream:
            for tick in stream:
                break

        assert tick.tick == 0
        assert source.close_count == 1

    def test_error_closes_source(self):
        """Test that a short read closes the source before propagating."""
        data = build_grid(BASIC_GRID)
        stream, source = self.make_stream(data[:-6])

        with pytest.raises(ShortReadError):
            list(stream)

        assert stream.closed
        assert source.close_count == 1
