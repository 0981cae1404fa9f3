"""Data models for decoded NBS songs."""

from nbsreader.models.header import DEFAULT_AUTHOR, DEFAULT_SONG_NAME, NBSHeader
from nbsreader.models.song import NoteBlock, Song, Tick

__all__ = [
    "DEFAULT_AUTHOR",
    "DEFAULT_SONG_NAME",
    "NBSHeader",
    "NoteBlock",
    "Song",
    "Tick",
]
