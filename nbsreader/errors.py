"""
Exceptions raised while decoding NBS files.
"""

from typing import Optional


class NBSError(Exception):
    """Base class for all NBS decoding errors."""

    pass


class ShortReadError(NBSError, EOFError):
    """
    Raised when the byte source ends before a read could be satisfied.

    A short read means the file is truncated or corrupt. It is never retried
    and no partial song data is returned.
    """

    def __init__(self, requested: int, received: int, offset: Optional[int] = None):
        self.requested = requested
        self.received = received
        self.offset = offset

        where = f" at offset 0x{offset:X}" if offset is not None else ""
        super().__init__(
            f"Short read{where}: requested {requested} bytes, got {received}"
        )


class InvalidEncodingError(NBSError, ValueError):
    """Raised for malformed text when strict text decoding is requested."""

    def __init__(self, raw: bytes, encoding: str, offset: Optional[int] = None):
        self.raw = raw
        self.encoding = encoding
        self.offset = offset

        where = f" at offset 0x{offset:X}" if offset is not None else ""
        super().__init__(f"Invalid {encoding} string{where} ({len(raw)} bytes)")
