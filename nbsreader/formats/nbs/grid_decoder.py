"""
NBS tick grid decoder.

The note block section is a sparse grid stored as nested delta runs:

    repeat:
        tick_delta:i16          0 ends the grid
        repeat:
            layer_delta:i16     0 ends this tick
            instrument:i8 key:i8 velocity:i8 panning:i8 pitch:i16

The tick accumulator starts at -1 for the whole grid; the layer accumulator
restarts at -1 for every tick. Note block ids count up across the whole file.

One state machine serves both consumption modes: `run()` decodes everything
at once, `step()` produces a single tick and is what TickStream pulls on.
"""

import logging
import struct
from enum import Enum
from typing import Iterator, List, Optional

from nbsreader.models.song import NoteBlock, Tick
from nbsreader.utils.cursor import ByteCursor
from nbsreader.utils.primitives import read_i16le

logger = logging.getLogger(__name__)

NOTE_BLOCK = struct.Struct("<bbbbh")


class GridState(Enum):
    """Decoder position within the grid."""

    AT_TICK = "at_tick"
    AT_LAYER = "at_layer"
    DONE = "done"


class TickGridDecoder:
    """
    Delta-run-length state machine over the tick grid.

    Example:
        decoder = TickGridDecoder(cursor)
        ticks = decoder.run()
    """

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor
        self.state = GridState.AT_TICK
        self.current_tick = -1
        self.noteblock_counter = 0

    @property
    def done(self) -> bool:
        return self.state is GridState.DONE

    def step(self) -> Optional[Tick]:
        """
        Advance to the next tick that holds at least one note block.

        Empty ticks are consumed and dropped along the way.

        Returns:
            The next non-empty Tick, or None once the grid is exhausted

        Raises:
            ShortReadError: If the file ends inside the grid
        """
        while not self.done:
            try:
                tick = self._read_tick()
            except Exception:
                self.state = GridState.DONE
                raise

            if tick is not None and tick.layers:
                return tick

        return None

    def run(self) -> List[Tick]:
        """
        Decode the remaining grid.

        Returns:
            All non-empty ticks in increasing tick order
        """
        ticks = []

        tick = self.step()
        while tick is not None:
            ticks.append(tick)
            tick = self.step()

        logger.debug(
            "%s: decoded %d ticks, %d note blocks",
            self.cursor.name,
            len(ticks),
            self.noteblock_counter,
        )
        return ticks

    def _read_tick(self) -> Optional[Tick]:
        tick_delta = read_i16le(self.cursor)

        if tick_delta <= 0:
            if tick_delta < 0:
                logger.warning(
                    "%s: negative tick delta %d at offset 0x%X, ending grid",
                    self.cursor.name,
                    tick_delta,
                    self.cursor.position - 2,
                )
            self.state = GridState.DONE
            return None

        self.current_tick += tick_delta
        self.state = GridState.AT_LAYER

        row = Tick(tick=self.current_tick)
        row.layers.extend(self._read_layers())

        self.state = GridState.AT_TICK
        return row

    def _read_layers(self) -> Iterator[NoteBlock]:
        current_layer = -1

        while True:
            layer_delta = read_i16le(self.cursor)

            if layer_delta <= 0:
                if layer_delta < 0:
                    logger.warning(
                        "%s: negative layer delta %d in tick %d, ending tick",
                        self.cursor.name,
                        layer_delta,
                        self.current_tick,
                    )
                return

            current_layer += layer_delta
            instrument, key, velocity, panning, pitch = NOTE_BLOCK.unpack(
                self.cursor.read_exact(NOTE_BLOCK.size)
            )

            yield NoteBlock(
                instrument=instrument,
                key=key,
                velocity=velocity,
                panning=panning,
                pitch=pitch,
                layer=current_layer,
                noteblock_id=self.noteblock_counter,
            )
            self.noteblock_counter += 1


class TickStream:
    """
    Lazy iterator over the tick grid of an open NBS file.

    Each pull decodes exactly one non-empty tick. The stream owns the byte
    source and closes it when the grid is exhausted, when decoding fails,
    on close(), on leaving a `with` block, or when the stream is garbage
    collected.

    Example:
        for tick in stream:
            ...
    """

    def __init__(self, decoder: TickGridDecoder):
        self._decoder = decoder
        self._cursor = decoder.cursor

    @property
    def closed(self) -> bool:
        return self._cursor.closed

    def __iter__(self) -> "TickStream":
        return self

    def __next__(self) -> Tick:
        if self.closed:
            raise StopIteration

        try:
            tick = self._decoder.step()
        except BaseException:
            self.close()
            raise

        if tick is None:
            self.close()
            raise StopIteration

        return tick

    def close(self) -> None:
        """Stop decoding and release the byte source."""
        if not self.closed:
            if not self._decoder.done:
                logger.debug(
                    "%s: tick stream abandoned at tick %d",
                    self._cursor.name,
                    self._decoder.current_tick,
                )
            self._cursor.close()

    def __enter__(self) -> "TickStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        # Attributes may be missing if __init__ never finished
        if getattr(self, "_cursor", None) is not None:
            self.close()
