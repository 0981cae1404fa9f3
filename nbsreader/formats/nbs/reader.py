"""
NBS file reader.

Opens a byte source, decodes the header and hands the tick grid to either
the eager or the lazy decoder.
"""

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Union

from nbsreader.config import DecoderConfig
from nbsreader.errors import NBSError
from nbsreader.formats.nbs.grid_decoder import TickGridDecoder, TickStream
from nbsreader.formats.nbs.header_decoder import decode_header
from nbsreader.models.song import Song
from nbsreader.utils.cursor import ByteCursor

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, bytearray, BinaryIO]


def open_source(source: Source) -> ByteCursor:
    """
    Wrap any supported source in a cursor.

    Paths are opened here; file objects and in-memory bytes are taken over
    as-is. Either way the returned cursor owns the source.

    Args:
        source: Path, raw bytes, or readable binary file object

    Returns:
        Cursor at the current position of the source
    """
    if isinstance(source, (str, Path)):
        return ByteCursor.open(source)

    if isinstance(source, (bytes, bytearray)):
        return ByteCursor(io.BytesIO(bytes(source)), name="<bytes>")

    return ByteCursor(source, name=getattr(source, "name", "<stream>"))


class NBSReader:
    """
    Reader for Note Block Studio .nbs song files.

    Example:
        song = NBSReader.read_all("song.nbs")
        print(f"Song: {song.header.song_name}, Ticks: {len(song.ticks)}")
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self.config = config

    @classmethod
    def read(cls, source: Source, config: Optional[DecoderConfig] = None) -> Song:
        """
        Read the header now and the tick grid on demand.

        Args:
            source: Path, raw bytes, or readable binary file object
            config: Decoder options

        Returns:
            Song whose ticks are a TickStream over the open source
        """
        return cls(config).parse_lazy(source)

    @classmethod
    def read_all(cls, source: Source, config: Optional[DecoderConfig] = None) -> Song:
        """
        Read the whole file into memory.

        Args:
            source: Path, raw bytes, or readable binary file object
            config: Decoder options

        Returns:
            Song whose ticks are a list
        """
        return cls(config).parse(source)

    def parse_lazy(self, source: Source) -> Song:
        cursor = open_source(source)

        try:
            header = decode_header(cursor, self.config)
        except BaseException:
            cursor.close()
            raise

        # The stream owns the cursor from here on
        return Song(header=header, ticks=TickStream(TickGridDecoder(cursor)))

    def parse(self, source: Source) -> Song:
        with open_source(source) as cursor:
            header = decode_header(cursor, self.config)
            ticks = TickGridDecoder(cursor).run()

        return Song(header=header, ticks=ticks)

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file has a decodable NBS header.

        Args:
            filepath: Path to check

        Returns:
            True if the header decodes
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        try:
            with ByteCursor.open(filepath) as cursor:
                decode_header(cursor)
            return True
        except (NBSError, OSError) as e:
            logger.debug("%s is not readable as NBS: %s", filepath, e)
            return False

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Get basic information about an NBS file without decoding the grid.

        Args:
            filepath: Path to .nbs file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        info: Dict[str, Any] = {
            "valid": False,
            "size": filepath.stat().st_size,
        }

        try:
            with ByteCursor.open(filepath) as cursor:
                header = decode_header(cursor)
                info["header_size"] = cursor.position
        except NBSError as e:
            info["error"] = str(e)
            return info

        info["valid"] = True
        info["version"] = header.version
        info["song_name"] = header.song_name
        info["legacy_format"] = header.is_legacy_format

        return info


def read(source: Source, config: Optional[DecoderConfig] = None) -> Song:
    """Read an NBS file lazily. See NBSReader.read."""
    return NBSReader.read(source, config)


def read_all(source: Source, config: Optional[DecoderConfig] = None) -> Song:
    """Read an NBS file eagerly. See NBSReader.read_all."""
    return NBSReader.read_all(source, config)
