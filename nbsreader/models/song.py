"""
Note block, tick and song data models.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Union

from nbsreader.models.header import NBSHeader

if TYPE_CHECKING:
    from nbsreader.formats.nbs.grid_decoder import TickStream


@dataclass(frozen=True)
class NoteBlock:
    """
    A single note block in the tick grid.

    Attributes:
        instrument: Instrument id
        key: Piano key, 0-87 where 0 is A0 and 87 is C8
        velocity: Volume, 0-100
        panning: Stereo position, stored 0-200 with 100 as center. Decoded
            as a signed byte, so values above 127 come out negative
        pitch: Fine pitch in cents, 100 = one semitone
        layer: Layer (track) the note block is played from
        noteblock_id: Position of the note block in the song, counting left
            to right, top to bottom across the whole file
    """

    instrument: int
    key: int
    velocity: int
    panning: int
    pitch: int
    layer: int
    noteblock_id: int


@dataclass
class Tick:
    """
    One column of the tick grid.

    Attributes:
        tick: Position in the song timeline
        layers: Note blocks at this tick, in increasing layer order
    """

    tick: int
    layers: List[NoteBlock] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[NoteBlock]:
        return iter(self.layers)


@dataclass
class Song:
    """
    Result of decoding an NBS file.

    `ticks` is a list when the file was read eagerly, or a TickStream bound
    to the still-open file when it was read lazily. Using the song as a
    context manager guarantees a lazy stream is closed.

    Example:
        with nbsreader.read("song.nbs") as song:
            for tick in song.ticks:
                print(tick.tick, len(tick))
    """

    header: NBSHeader
    ticks: Union[List[Tick], "TickStream"]

    @property
    def is_lazy(self) -> bool:
        return not isinstance(self.ticks, list)

    def close(self) -> None:
        """Release the byte source held by a lazy stream."""
        if self.is_lazy:
            self.ticks.close()

    def __enter__(self) -> "Song":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
