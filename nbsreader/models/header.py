"""
NBS song header model.

Field meanings follow the Open Note Block Studio format description
(https://opennbs.org/nbs).
"""

from dataclasses import dataclass, fields
from typing import Any, Dict

# Values used when the matching Pascal string is absent
DEFAULT_SONG_NAME = "Untitled"
DEFAULT_AUTHOR = "Unknown"


@dataclass(frozen=True)
class NBSHeader:
    """
    Song metadata decoded from the start of an NBS file.

    Values are passed through exactly as stored; nothing here is range
    checked.

    Attributes:
        zeroes: First two bytes of the file, 0 for versioned files. Anything
            else means an older layout was probably loaded
        version: NBS format version
        instrument_count: Number of default instruments when the song was saved
        song_length: Length of the song in ticks
        layer_count: Last layer holding a note block or changed settings
        song_name: Name of the song
        song_author: Author of the song
        original_song_author: Original author of the song
        song_description: Description of the song
        song_tempo: Tempo in ticks per second, multiplied by 100
        auto_save: 1 if auto-saving was enabled, 0 otherwise
        auto_save_duration: Minutes between auto-saves
        time_signature: Beats per bar, normally 2-8
        minutes_spent: Minutes spent on the project
        left_clicks: Times the user left-clicked
        right_clicks: Times the user right-clicked
        note_blocks_added: Times a note block was added
        note_blocks_removed: Times a note block was removed
        import_file_name: .mid or .schematic file the song was imported from
        loop: 1 if looping is on, 0 otherwise
        max_loop_count: Times to loop, 0 meaning forever
        loop_start_tick: Tick to jump back to when looping
    """

    zeroes: int
    version: int
    instrument_count: int
    song_length: int
    layer_count: int
    song_name: str
    song_author: str
    original_song_author: str
    song_description: str
    song_tempo: int
    auto_save: int
    auto_save_duration: int
    time_signature: int
    minutes_spent: int
    left_clicks: int
    right_clicks: int
    note_blocks_added: int
    note_blocks_removed: int
    import_file_name: str
    loop: int
    max_loop_count: int
    loop_start_tick: int

    @property
    def tempo(self) -> float:
        """Tempo in ticks per second."""
        return self.song_tempo / 100

    @property
    def is_legacy_format(self) -> bool:
        return self.zeroes != 0

    @property
    def auto_save_enabled(self) -> bool:
        return self.auto_save != 0

    @property
    def loop_enabled(self) -> bool:
        return self.loop != 0

    @property
    def duration_seconds(self) -> float:
        """Song length in seconds, or 0.0 when the tempo is not positive."""
        if self.tempo <= 0:
            return 0.0
        return self.song_length / self.tempo

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a dict keyed by the camelCase names of the format docs.

        Returns:
            Dictionary like {"zeroes": 0, "songName": "...", ...}
        """
        return {_camel_case(f.name): getattr(self, f.name) for f in fields(self)}


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
