"""
Grid statistics for decoded songs.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from nbsreader.models.song import Tick


@dataclass
class GridSummary:
    """
    Aggregate statistics over a tick grid.

    Attributes:
        tick_count: Number of non-empty ticks
        note_count: Number of note blocks
        first_tick: Tick index of the first note, -1 if the grid is empty
        last_tick: Tick index of the last note, -1 if the grid is empty
        layers: Sorted layer indices that hold at least one note
        instruments: Note count per instrument id
        max_polyphony: Largest number of notes in a single tick
    """

    tick_count: int = 0
    note_count: int = 0
    first_tick: int = -1
    last_tick: int = -1
    layers: List[int] = field(default_factory=list)
    instruments: Dict[int, int] = field(default_factory=dict)
    max_polyphony: int = 0

    def to_dict(self) -> dict:
        return {
            "tickCount": self.tick_count,
            "noteCount": self.note_count,
            "firstTick": self.first_tick,
            "lastTick": self.last_tick,
            "layers": list(self.layers),
            "instruments": {str(k): v for k, v in sorted(self.instruments.items())},
            "maxPolyphony": self.max_polyphony,
        }


def summarize_ticks(ticks: Iterable[Tick]) -> GridSummary:
    """
    Collect statistics from ticks.

    Works on a list or a TickStream; a stream is consumed.

    Args:
        ticks: Ticks in song order

    Returns:
        GridSummary of the grid
    """
    summary = GridSummary()
    layers = set()

    for tick in ticks:
        if summary.tick_count == 0:
            summary.first_tick = tick.tick
        summary.last_tick = tick.tick
        summary.tick_count += 1
        summary.note_count += len(tick.layers)
        summary.max_polyphony = max(summary.max_polyphony, len(tick.layers))

        for block in tick.layers:
            layers.add(block.layer)
            summary.instruments[block.instrument] = (
                summary.instruments.get(block.instrument, 0) + 1
            )

    summary.layers = sorted(layers)
    return summary
