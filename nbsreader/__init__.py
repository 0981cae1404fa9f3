"""
nbsreader - Decoder for Note Block Studio (.nbs) song files.

This library provides tools to:
- Decode the song header (name, author, tempo, loop settings, statistics)
- Decode the note block grid eagerly into a list of ticks
- Stream the note block grid tick by tick from an open file

Example usage:
    import nbsreader

    # Everything at once
    song = nbsreader.read_all("song.nbs")
    print(song.header.song_name, len(song.ticks))

    # One tick at a time; the file stays open until the stream ends
    with nbsreader.read("song.nbs") as song:
        for tick in song.ticks:
            print(tick.tick, [block.key for block in tick])
"""

__version__ = "0.1.0"
__author__ = "nbsreader Contributors"

from nbsreader.config import DEFAULT_CONFIG, DecoderConfig
from nbsreader.errors import InvalidEncodingError, NBSError, ShortReadError
from nbsreader.formats.nbs.grid_decoder import TickStream
from nbsreader.formats.nbs.reader import NBSReader, read, read_all
from nbsreader.models.header import NBSHeader
from nbsreader.models.song import NoteBlock, Song, Tick

__all__ = [
    "DEFAULT_CONFIG",
    "DecoderConfig",
    "InvalidEncodingError",
    "NBSError",
    "ShortReadError",
    "TickStream",
    "NBSReader",
    "read",
    "read_all",
    "NBSHeader",
    "NoteBlock",
    "Song",
    "Tick",
]
