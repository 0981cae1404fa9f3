"""
Sequential byte cursor over an NBS byte source.

The NBS layout is strictly positional: every field offset is implied by the
reads that came before it, so the cursor only ever moves forward.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Union

from nbsreader.errors import ShortReadError

logger = logging.getLogger(__name__)


class ByteCursor:
    """
    Forward-only reader that hands out exact-length byte spans.

    Example:
        with ByteCursor.open("song.nbs") as cursor:
            first_block = cursor.read_exact(8)
    """

    def __init__(self, source: BinaryIO, name: str = "<stream>"):
        self._source = source
        self.name = name
        self.position = 0
        self._closed = False

    @classmethod
    def open(cls, filepath: Union[str, Path]) -> "ByteCursor":
        """
        Open a file on disk for reading.

        Args:
            filepath: Path to .nbs file

        Returns:
            Cursor positioned at the start of the file
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        return cls(open(filepath, "rb"), name=str(filepath))

    @property
    def closed(self) -> bool:
        return self._closed

    def read_exact(self, length: int) -> bytes:
        """
        Read exactly `length` bytes and advance the cursor.

        Args:
            length: Number of bytes to read

        Returns:
            The bytes read

        Raises:
            ShortReadError: If the source ends first
        """
        if length <= 0:
            return b""

        chunks = []
        remaining = length

        # Raw and socket-like streams may return fewer bytes than asked for
        while remaining > 0:
            chunk = self._source.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

        data = b"".join(chunks)

        if len(data) < length:
            raise ShortReadError(length, len(data), offset=self.position)

        self.position += length
        return data

    def close(self) -> None:
        """Close the underlying source. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True
        logger.debug("Closing %s after %d bytes", self.name, self.position)
        self._source.close()

    def __enter__(self) -> "ByteCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<ByteCursor {self.name} pos={self.position} {state}>"
